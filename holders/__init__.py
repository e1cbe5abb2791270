"""Holders application for the pet clinic backend.

This package contains the holder/pet/visit aggregate, the repository that
persists it, and the views and route registrations exposing it over HTTP.
"""
