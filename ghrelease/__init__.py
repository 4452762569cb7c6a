"""Create a GitHub release from a build and rotate the release-notes file."""

__version__ = "1.0.0"
