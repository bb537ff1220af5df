"""
API HTTP de CLI Bridge.
"""
