"""Listener bounded context.

Routes broker messages through a static dispatch table, records them and
confirms them against the owning platform service.
"""
