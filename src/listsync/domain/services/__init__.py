from .steady_status import is_steady, matches_fail_pattern, normalize_steady_status

__all__ = ["is_steady", "matches_fail_pattern", "normalize_steady_status"]
