"""
PktCrypt - RC4 UDP payload decryption for packet captures
"""

__version__ = "0.1.0"
