from typetester.services.accounts import authenticate_user, delete_user, get_user, register_user
from typetester.services.results import list_results, parse_limit, save_result
from typetester.services.stats import compute_stats, get_user_stats

__all__ = [
    "authenticate_user",
    "delete_user",
    "get_user",
    "register_user",
    "list_results",
    "parse_limit",
    "save_result",
    "compute_stats",
    "get_user_stats",
]
