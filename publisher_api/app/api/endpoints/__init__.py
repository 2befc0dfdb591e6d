"""
Endpoint modules, one ``APIRouter`` per domain (accounts, publishers).
"""
