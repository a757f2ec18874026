"""
Application use cases.
"""

from caissier.application.use_cases.bind_wallet import BindWallet
from caissier.application.use_cases.change_password import ChangePassword
from caissier.application.use_cases.delete_account import DeleteAccount
from caissier.application.use_cases.get_payment import GetPayment
from caissier.application.use_cases.get_payment_stats import GetPaymentStats
from caissier.application.use_cases.get_wallet_balance import GetWalletBalance
from caissier.application.use_cases.list_payments import ListPayments
from caissier.application.use_cases.list_wallets import ListWallets
from caissier.application.use_cases.login_user import LoginUser
from caissier.application.use_cases.payment_confirmation import PaymentConfirmation
from caissier.application.use_cases.refresh_payment_status import (
    RefreshPaymentStatus,
)
from caissier.application.use_cases.sign_up import SignUp
from caissier.application.use_cases.submit_payment import SubmitPayment
from caissier.application.use_cases.update_email import UpdateEmail

__all__ = [
    # Wallets
    "BindWallet",
    "ListWallets",
    "GetWalletBalance",
    # Payments
    "SubmitPayment",
    "RefreshPaymentStatus",
    "PaymentConfirmation",
    "GetPayment",
    "ListPayments",
    "GetPaymentStats",
    # Identity
    "SignUp",
    "LoginUser",
    "ChangePassword",
    "UpdateEmail",
    "DeleteAccount",
]
