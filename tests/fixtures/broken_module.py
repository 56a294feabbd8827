"""Module whose top-level code fails on import."""

raise RuntimeError("module top-level failure")
