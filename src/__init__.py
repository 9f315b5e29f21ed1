"""
Bosphorus crossing detector: route fetching, bridge/tunnel detection and
map rendering.
"""
