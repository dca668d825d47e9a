"""Quizboard: community quiz platform with a reputation and voucher economy."""

__version__ = "0.1.0"
