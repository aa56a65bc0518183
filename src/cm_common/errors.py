"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth/User
  2xxx: Points
  3xxx: Promotion / Ads
  4xxx: Verification
  9xxx: System

Every business failure is raised as an AppError and converted into an
ApiResponse by the handler registered in main.py.
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Auth/User ---

class UsernameExistsError(AppError):
    def __init__(self) -> None:
        super().__init__(1001, "Username already exists", 409)


class EmailExistsError(AppError):
    def __init__(self) -> None:
        super().__init__(1002, "Email already exists", 409)


class InvalidCredentialsError(AppError):
    def __init__(self) -> None:
        super().__init__(1003, "Invalid username or password", 401)


class AccountDisabledError(AppError):
    def __init__(self) -> None:
        super().__init__(1004, "Account is disabled", 403)


class InvalidRefreshTokenError(AppError):
    def __init__(self) -> None:
        super().__init__(1005, "Refresh token is invalid or expired", 401)


class ForbiddenError(AppError):
    def __init__(self, detail: str = "You do not have access to this resource") -> None:
        super().__init__(1006, detail, 403)


class AdminRequiredError(AppError):
    def __init__(self) -> None:
        super().__init__(1007, "Admin privileges required", 403)


class InvalidResetTokenError(AppError):
    def __init__(self) -> None:
        super().__init__(
            1008,
            "Password reset token is invalid or has expired. Please start the reset again.",
            400,
        )


# --- 2xxx: Points ---

class InsufficientBalanceError(AppError):
    def __init__(self, required: int, available: int) -> None:
        super().__init__(
            2001,
            f"Insufficient balance: required {required} points, available {available} points",
            422,
        )
        self.required = required
        self.available = available


class AccountNotFoundError(AppError):
    def __init__(self, user_id: str) -> None:
        super().__init__(2002, f"Account not found for user {user_id}", 404)


class InsufficientPointsError(AppError):
    def __init__(self, required: int, available: int) -> None:
        super().__init__(
            2003,
            f"Not enough points: this promotion costs {required} points and you have "
            f"{available}. Please buy more points.",
            422,
        )
        self.required = required
        self.available = available


class InvalidAmountError(AppError):
    def __init__(self, amount: int) -> None:
        super().__init__(2004, f"Point amount must be non-zero, got {amount}", 422)


# --- 3xxx: Promotion / Ads ---

class PlanNotFoundError(AppError):
    def __init__(self, plan_id: int) -> None:
        super().__init__(3001, f"Promotion plan not found: {plan_id}", 404)


class PromotionNotFoundError(AppError):
    def __init__(self, promotion_id: int) -> None:
        super().__init__(3002, f"Promotion not found: {promotion_id}", 404)


class NotOwnerError(AppError):
    def __init__(self, promotion_id: int) -> None:
        super().__init__(3003, f"Promotion {promotion_id} belongs to another account", 403)


class VerificationRequiredError(AppError):
    def __init__(self) -> None:
        super().__init__(
            3004, "Verify your mobile number before promoting ads", 403
        )


class AdNotFoundError(AppError):
    def __init__(self, ad_id: int) -> None:
        super().__init__(3005, f"Ad not found: {ad_id}", 404)


class PromotionAlreadyAttachedError(AppError):
    def __init__(self, promotion_id: int, ad_id: int) -> None:
        super().__init__(
            3006, f"Promotion {promotion_id} is already attached to ad {ad_id}", 409
        )


class AdAlreadyPromotedError(AppError):
    def __init__(self, ad_id: int) -> None:
        super().__init__(3007, f"Ad {ad_id} already has an active promotion", 409)


class UnderpricedPromotionError(AppError):
    def __init__(self, offered: int, quoted: int) -> None:
        super().__init__(
            3008,
            f"Offered {offered} points but this promotion costs {quoted} points",
            422,
        )


class PromotionExpiredError(AppError):
    def __init__(self, promotion_id: int) -> None:
        super().__init__(3009, f"Promotion {promotion_id} has already expired", 409)


# --- 4xxx: Verification ---

class InvalidFormatError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(4001, detail, 422)


class NoChallengeError(AppError):
    def __init__(self) -> None:
        super().__init__(
            4002, "No verification code is pending. Please request a new code.", 400
        )


class CodeExpiredError(AppError):
    def __init__(self) -> None:
        super().__init__(
            4003, "Verification code has expired. Please request a new code.", 400
        )


class CodeMismatchError(AppError):
    def __init__(self) -> None:
        super().__init__(4004, "Verification code is incorrect. Please try again.", 400)

