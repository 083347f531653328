"""Checklist Compliance package.

Organized by feature modules (geofence, checklists, completions, compliance, ...)
with a thin Flask controller layer over service/repository layers.
"""
