"""
nodegate: target remote nodes and drive their canvases through a gateway.
"""

__version__ = "0.1.0"
