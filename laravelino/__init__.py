"""
Laravelino - shell PATH configurator for Laravel web server hosts.
"""

VERSION = "1.0.0"
__version__ = VERSION
