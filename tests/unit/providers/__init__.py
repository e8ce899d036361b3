"""Unit tests for market data providers.

This package contains unit tests for all provider implementations, including
data providers for fetching historical and real-time price data from various
market data sources.
"""
