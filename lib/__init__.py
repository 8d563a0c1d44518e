# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Typed Supabase wrapper for row-level database operations
# - utils.py: Shared utilities (time formatting, blank-value handling)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import blank_to_none, drop_blank, to_date_string, utc_now_iso

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Utils
    "blank_to_none",
    "drop_blank",
    "to_date_string",
    "utc_now_iso",
]
