from billed.common.exceptions import AppError


class ReceiptValidationError(AppError):
    """Receipt file rejected before upload (extension not allowed)"""

    def __init__(self, filename: str, allowed: list[str]):
        self.message = (
            f"Le justificatif '{filename}' doit être au format "
            f"{', '.join(allowed)}."
        )
        self.filename = filename
        super().__init__(self.message)
