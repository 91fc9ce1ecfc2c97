"""
Boundary layer for external system integrations.

Handles interactions with the relational store and the vector store.
"""
