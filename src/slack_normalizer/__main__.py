"""Slack normalizer CLI bootstrap."""

from __future__ import annotations

from slack_normalizer.cli import app

if __name__ == "__main__":
    app()
