# src/adapters/__init__.py — v1
