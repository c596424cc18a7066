# src/reporting/__init__.py — v1
