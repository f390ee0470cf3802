"""
Cells Sync Client Services

- settings/ - Agent settings synchronization
"""
