"""
API

Flask blueprints exposing the establishment services over JSON.
"""
