"""Kubernetes File Transfer - browse clusters and copy files to and from pods."""

from k8s_file_transfer.__version__ import __version__

__all__ = ["__version__"]
