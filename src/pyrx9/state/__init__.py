"""State synchronization core.

This package decides which incoming notifications turn into downstream
attribute writes (:mod:`pyrx9.state.fingerprint`) and which snapshot
transitions turn into events (:mod:`pyrx9.state.edges`).
"""
