"""Domain errors raised by the ledger core

Use cases translate these into ``libs.result.Error`` values using ``code``.
"""


class LedgerDomainError(Exception):
    code = "LEDGER_DOMAIN_ERROR"

    def __init__(self, message: str, code: str = None):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code


class InvalidAmountError(LedgerDomainError):
    code = "INVALID_AMOUNT"


class InvalidQuantityError(LedgerDomainError):
    code = "INVALID_QUANTITY"


class DocumentNotFoundError(LedgerDomainError):
    code = "DOCUMENT_NOT_FOUND"


class TerminalStatusError(LedgerDomainError):
    code = "TERMINAL_STATUS"


class InvalidTransitionError(LedgerDomainError):
    code = "INVALID_STATUS_TRANSITION"


class ReferenceSequenceConflictError(LedgerDomainError):
    code = "REFERENCE_SEQUENCE_CONFLICT"
