"""
Health probes for optional backends used by the Easly assistant runtime.
"""
