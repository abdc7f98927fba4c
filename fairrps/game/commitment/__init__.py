"""
承诺模块
Commitment Module
"""
from .commitment_scheme import SecretKey, Commitment, CommitmentScheme, verify_commitment

__all__ = ['SecretKey', 'Commitment', 'CommitmentScheme', 'verify_commitment']
