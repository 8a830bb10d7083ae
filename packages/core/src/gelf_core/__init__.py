"""Diff-driven commit messages and structured AI code review."""
