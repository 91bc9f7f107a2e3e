"""Shared kernel for the tenant event harness.

Contains value objects, ports and probes used by every listener domain:
identity scopes, the event recorder and the inbound message model.
"""
