"""
Core download domain: state machine rules, source URL handling,
security primitives and the background lifecycle engine.
"""
