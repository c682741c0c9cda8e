# core/exceptions.py

"""
WORKFLOW ERRORS

Centralized domain errors for the production and commercial workflows.

Every error carries:
- kind: one of the four stable categories below (drives HTTP mapping)
- code: the concrete failure name (class name), stable for API clients

Categories:
- NotFound                     referenced row does not exist (or is not visible)
- InvalidState                 row exists but is not in the precondition state
- BusinessRuleViolation        states are individually valid, combination is not
- ReferentialIntegrityFailure  a line references an item that is gone or inactive
"""

from __future__ import annotations

KIND_NOT_FOUND = "NotFound"
KIND_INVALID_STATE = "InvalidState"
KIND_BUSINESS_RULE = "BusinessRuleViolation"
KIND_REFERENTIAL_INTEGRITY = "ReferentialIntegrityFailure"


class WorkflowError(Exception):
    """Base exception for all workflow failures."""

    kind = "WorkflowError"
    default_message = "Workflow operation failed."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)

    @property
    def code(self) -> str:
        return type(self).__name__

    @property
    def message(self) -> str:
        return str(self)


# =========================================================
# KINDS
# =========================================================
class NotFound(WorkflowError):
    kind = KIND_NOT_FOUND
    default_message = "Not found."


class InvalidState(WorkflowError):
    kind = KIND_INVALID_STATE
    default_message = "Invalid state for this operation."


class BusinessRuleViolation(WorkflowError):
    kind = KIND_BUSINESS_RULE
    default_message = "Business rule violated."


class ReferentialIntegrityFailure(WorkflowError):
    kind = KIND_REFERENTIAL_INTEGRITY
    default_message = "Referenced item is missing or inactive."


# =========================================================
# NOT FOUND
# =========================================================
class ItemNotFound(NotFound):
    default_message = "Stock item not found."


class ClientNotFound(NotFound):
    default_message = "Client not found."


class ReportNotFound(NotFound):
    default_message = "Report not found."


class OrderNotFound(NotFound):
    default_message = "Order not found."


class NoQuotePending(NotFound):
    default_message = "No pending quote for this order."


class NoInvoice(NotFound):
    default_message = "No invoice exists for this order."


# =========================================================
# INVALID STATE
# =========================================================
class AlreadySubmitted(InvalidState):
    default_message = "Report has already been submitted."


class NotDraft(InvalidState):
    default_message = "Order is not in draft status."


class NotConfirmed(InvalidState):
    default_message = "Order must be confirmed before it can be quoted."


class NotQuoted(InvalidState):
    default_message = "Order is not awaiting a quote decision."


class QuoteNotAccepted(InvalidState):
    default_message = "Order quote must be accepted before invoicing."


class NotInvoiced(InvalidState):
    default_message = "Order is not awaiting payment."


class InvalidTransition(InvalidState):
    default_message = "Status transition is not allowed."


# =========================================================
# BUSINESS RULES
# =========================================================
class QuoteExpired(BusinessRuleViolation):
    default_message = "Quote validity date has passed."


class QuoteAlreadyAccepted(BusinessRuleViolation):
    default_message = "An accepted quote already exists for this order."


class InvoiceExists(BusinessRuleViolation):
    default_message = "An invoice already exists for this order."


class AmountExceedsRemaining(BusinessRuleViolation):
    default_message = "Payment amount exceeds the remaining balance."


class InvalidAmount(BusinessRuleViolation):
    default_message = "Amount must be greater than zero."


class ClientInactive(BusinessRuleViolation):
    default_message = "Client is inactive."


class ProductInactive(BusinessRuleViolation):
    default_message = "Product is inactive."


class EmptyOrder(BusinessRuleViolation):
    default_message = "An order needs at least one line item."


class DuplicateReport(BusinessRuleViolation):
    default_message = "A report already exists for this user and date."


class PaymentsRecorded(BusinessRuleViolation):
    default_message = "Order has recorded payments and cannot be cancelled."


class InvalidAdjustment(BusinessRuleViolation):
    default_message = "Stock adjustment rejected."


class InvalidQuantity(BusinessRuleViolation):
    default_message = "Quantity is invalid for this movement."


class InsufficientStock(BusinessRuleViolation):
    default_message = "Not enough stock for this delivery."


class UnsupportedMovement(BusinessRuleViolation):
    default_message = "Movement kind is not supported for this item class."


# =========================================================
# REFERENTIAL INTEGRITY
# =========================================================
class ItemInactive(ReferentialIntegrityFailure):
    default_message = "Stock item is inactive."
