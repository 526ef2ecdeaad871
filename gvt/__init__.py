"""gvt - minimal local version tracking.

Records full snapshots of tracked files in a hidden control directory,
one numbered version per change, with a message each.
"""

__version__ = "1.0.0"
