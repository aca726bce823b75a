"""
Class-based policies for docguard.

Policies group the access rules of one resource into a class and turn into
an AccessController with ``Policy.as_access_controller()``.
"""

from docguard.policies.base import Policy
from docguard.policies.builtin import AllowAllPolicy, DenyAllPolicy, OwnerPolicy

__all__ = [
    "AllowAllPolicy",
    "DenyAllPolicy",
    "OwnerPolicy",
    "Policy",
]
