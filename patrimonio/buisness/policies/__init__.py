"""
Policy classes for asset management business rules

Policies are composable validation rules that enforce business invariants.
They take plain values and raise domain exceptions when violations are detected.
"""

from patrimonio.buisness.policies.loan_lifecycle import LoanLifecyclePolicy
from patrimonio.buisness.policies.uniqueness import UniquenessPolicy
from patrimonio.buisness.policies.account_protection import AccountProtectionPolicy
from patrimonio.buisness.policies.role_access import RoleAccessPolicy
from patrimonio.buisness.policies.dependency_guard import DependencyGuardPolicy

__all__ = [
    'LoanLifecyclePolicy',
    'UniquenessPolicy',
    'AccountProtectionPolicy',
    'RoleAccessPolicy',
    'DependencyGuardPolicy',
]
