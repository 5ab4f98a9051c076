"""Version information for k8s_file_transfer."""

__version__ = "1.0.0"
