"""Runnable front ends."""
