"""Prefect flows.

- prepare.py - build the equality and tetanus_pab snapshots
"""
