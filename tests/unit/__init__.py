"""Unit tests for Stockboard."""
