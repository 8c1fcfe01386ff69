# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the product logic:
# - models/: Pydantic schemas for data validation
# - services/: Product operations on top of the database and cache
# =============================================================================
