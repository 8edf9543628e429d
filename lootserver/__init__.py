"""Toolkit for a game backend's server API: HTTP client, filtered logging, and leaderboard and character models."""

__version__ = "0.1.0"

__all__ = ["character", "http_client", "leaderboard", "leaderboard_rewards", "logger"]