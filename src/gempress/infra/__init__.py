"""Filesystem outputs of a build."""
