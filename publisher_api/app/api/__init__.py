"""
HTTP API package.

``router.py`` exposes the aggregated ``router``; each module in
``endpoints`` defines the ``APIRouter`` of one domain.
"""
