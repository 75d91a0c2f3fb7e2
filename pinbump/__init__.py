"""pinbump: bump a commit pin in a deployment manifest and open a PR."""

__version__ = "0.1.0"
