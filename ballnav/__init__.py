"""Course geometry, target selection and drive commands for a camera-guided ball-collecting robot."""

__version__ = "0.1.0"