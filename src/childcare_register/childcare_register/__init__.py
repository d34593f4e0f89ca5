"""Childcare Register package.

This package is organized by feature modules (children, attendance, meals)
with a thin Flask controller layer and service/repository layers.
"""
