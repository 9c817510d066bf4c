"""
Core Components

- browser: driver factory and event hooks
- session: records, registry, lifecycle manager
"""
