"""State layer.

This package owns everything that persists across cycles: the rendered
set (reconciler), trail histories, and the configuration change policy.
"""
