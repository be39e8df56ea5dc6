"""
Backend Scripts Module

Utility scripts for database operations and maintenance.

Available scripts:
    - seed_data.py: Seeds a demo BI, automation and task series

Usage:
    python -m scripts.seed_data
"""
