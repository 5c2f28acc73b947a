"""
Application Layer for the Training Dashboard API.

This package contains:
- ports/: Abstract repository interfaces and the exceptions adapters raise
"""
