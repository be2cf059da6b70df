"""
Types and enums for project workflow settings.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ApprovalAuthority(str, Enum):
    """Which side(s) of the project relationship may approve an entity."""

    BOTH = "both"
    SUPPLIER_ONLY = "supplier_only"
    CUSTOMER_ONLY = "customer_only"
    EITHER = "either"
    CONDITIONAL = "conditional"
    NONE = "none"


# Stored values written by older settings screens
LEGACY_AUTHORITY_VALUES: dict[str, ApprovalAuthority] = {
    "supplier_pm": ApprovalAuthority.SUPPLIER_ONLY,
    "customer_pm": ApprovalAuthority.CUSTOMER_ONLY,
}


class GovernedEntity(str, Enum):
    """Entity types whose approval authority is configurable per project."""

    BASELINE = "baseline"
    VARIATION = "variation"
    CERTIFICATE = "certificate"
    DELIVERABLE = "deliverable"
    DELIVERABLE_REVIEW = "deliverable_review"
    TIMESHEET = "timesheet"
    EXPENSE = "expense"


class Feature(str, Enum):
    """Project features that can be switched on or off."""

    BASELINES = "baselines"
    VARIATIONS = "variations"
    CERTIFICATES = "certificates"
    MILESTONE_BILLING = "milestone_billing"
    DELIVERABLE_APPROVAL = "deliverable_approval"
    DELIVERABLE_REVIEW = "deliverable_review"
    QUALITY_STANDARDS = "quality_standards"
    KPIS = "kpis"
    TIMESHEETS = "timesheets"
    TIMESHEET_APPROVAL = "timesheet_approval"
    EXPENSES = "expenses"
    EXPENSE_APPROVAL = "expense_approval"
    EXPENSE_RECEIPTS = "expense_receipts"
    RAID = "raid"


AUTHORITY_SETTING_KEYS: dict[str, str] = {
    GovernedEntity.BASELINE.value: "baseline_approval",
    GovernedEntity.VARIATION.value: "variation_approval",
    GovernedEntity.CERTIFICATE.value: "certificate_approval",
    GovernedEntity.DELIVERABLE.value: "deliverable_approval_authority",
    GovernedEntity.DELIVERABLE_REVIEW.value: "deliverable_review_authority",
    GovernedEntity.TIMESHEET.value: "timesheet_approval_authority",
    GovernedEntity.EXPENSE.value: "expense_approval_authority",
}

FEATURE_SETTING_KEYS: dict[str, str] = {
    Feature.BASELINES.value: "baselines_required",
    Feature.VARIATIONS.value: "variations_enabled",
    Feature.CERTIFICATES.value: "certificates_required",
    Feature.MILESTONE_BILLING.value: "milestone_billing_enabled",
    Feature.DELIVERABLE_APPROVAL.value: "deliverable_approval_required",
    Feature.DELIVERABLE_REVIEW.value: "deliverable_review_required",
    Feature.QUALITY_STANDARDS.value: "quality_standards_enabled",
    Feature.KPIS.value: "kpis_enabled",
    Feature.TIMESHEETS.value: "timesheets_enabled",
    Feature.TIMESHEET_APPROVAL.value: "timesheet_approval_required",
    Feature.EXPENSES.value: "expenses_enabled",
    Feature.EXPENSE_APPROVAL.value: "expense_approval_required",
    Feature.EXPENSE_RECEIPTS.value: "expense_receipt_required",
    Feature.RAID.value: "raid_enabled",
}

# Feature flag that switches the approval gate of a governed entity on or off
APPROVAL_FEATURES: dict[str, Feature] = {
    GovernedEntity.DELIVERABLE.value: Feature.DELIVERABLE_APPROVAL,
    GovernedEntity.DELIVERABLE_REVIEW.value: Feature.DELIVERABLE_REVIEW,
    GovernedEntity.TIMESHEET.value: Feature.TIMESHEET_APPROVAL,
    GovernedEntity.EXPENSE.value: Feature.EXPENSE_APPROVAL,
}

# Permission matrix entity holding the base edit permission for "none" mode
MATRIX_ENTITIES: dict[str, str] = {
    GovernedEntity.BASELINE.value: "milestones",
    GovernedEntity.VARIATION.value: "variations",
    GovernedEntity.CERTIFICATE.value: "certificates",
    GovernedEntity.DELIVERABLE.value: "deliverables",
    GovernedEntity.DELIVERABLE_REVIEW.value: "deliverables",
    GovernedEntity.TIMESHEET.value: "timesheets",
    GovernedEntity.EXPENSE.value: "expenses",
}


class WorkflowSettings(BaseModel):
    """
    Per-project workflow configuration as stored by the settings store.

    Every field is optional: None means "not set" and is interpreted by the
    settings resolver, never by callers. Authority values are kept as raw
    strings so unknown stored values are tolerated and resolved safely.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    # Milestones
    baselines_required: Optional[bool] = None
    baseline_approval: Optional[str] = None
    variations_enabled: Optional[bool] = None
    variation_approval: Optional[str] = None
    certificates_required: Optional[bool] = None
    certificate_approval: Optional[str] = None
    milestone_billing_enabled: Optional[bool] = None

    # Deliverables
    deliverable_approval_required: Optional[bool] = None
    deliverable_approval_authority: Optional[str] = None
    deliverable_review_required: Optional[bool] = None
    deliverable_review_authority: Optional[str] = None
    quality_standards_enabled: Optional[bool] = None
    kpis_enabled: Optional[bool] = None

    # Timesheets
    timesheets_enabled: Optional[bool] = None
    timesheet_approval_required: Optional[bool] = None
    timesheet_approval_authority: Optional[str] = None

    # Expenses
    expenses_enabled: Optional[bool] = None
    expense_approval_required: Optional[bool] = None
    expense_approval_authority: Optional[str] = None
    expense_receipt_required: Optional[bool] = None
    expense_receipt_threshold: Optional[Decimal] = Field(None, ge=0)

    # Modules
    raid_enabled: Optional[bool] = None


class ApprovalStatus(BaseModel):
    """Signature progress of a dual-signable entity for one role."""

    model_config = ConfigDict(frozen=True)

    can_sign: bool
    needs_supplier: bool
    needs_customer: bool
    is_complete: bool
