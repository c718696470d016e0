"""cs3build - compile Cloudstream plugin classes into a dex archive."""

__version__ = "0.1.0"
