"""
magscan: magnetic-anomaly detection and classification for AR ground overlays.
"""

__version__ = "0.1.0"
