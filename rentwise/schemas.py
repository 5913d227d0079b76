from datetime import date, datetime
from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .domain.types import ApplicationStatus


def _iso_day(v: Any) -> Any:
    # stored dates come back as full timestamps
    if isinstance(v, str) and len(v) > 10 and v[4:5] == "-":
        return v[:10]
    return v


IsoDay = Annotated[date, BeforeValidator(_iso_day)]


class WireModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# --- Rental application sections ---


class Address(WireModel):
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None


class PersonalInfo(WireModel):
    first_name: str
    last_name: str
    email: str
    phone: str
    date_of_birth: IsoDay
    current_address: Address | None = None


class Employment(WireModel):
    employer: str | None = None
    job_title: str | None = None
    monthly_income: float | None = Field(default=None, ge=0)
    employment_duration: str | None = None
    work_phone: str | None = None


class ContactRef(WireModel):
    name: str | None = None
    relationship: str | None = None
    phone: str | None = None
    email: str | None = None


class RentalInfo(WireModel):
    desired_move_in_date: IsoDay
    lease_duration: int = Field(..., ge=1)
    number_of_occupants: int = Field(default=1, ge=1)
    has_pets: bool = False
    pet_details: str | None = None
    previous_landlord: ContactRef | None = None
    previous_rental_history: str | None = None


class GuarantorInfo(ContactRef):
    address: str | None = None


class FinancialInfo(WireModel):
    annual_income: float | None = Field(default=None, ge=0)
    credit_score: int | None = None
    bank_name: str | None = None
    account_type: str | None = None
    has_guarantor: bool = False
    guarantor_info: GuarantorInfo | None = None


class AdditionalInfo(WireModel):
    reason_for_moving: str | None = None
    special_requirements: str | None = None
    additional_comments: str | None = None
    emergency_contact: ContactRef | None = None


class ApplicationDraft(WireModel):
    """Body of POST /rental-applications/{propertyId}. No status/decision/messages."""

    personal_info: PersonalInfo
    employment: Employment = Field(default_factory=Employment)
    rental_info: RentalInfo
    financial_info: FinancialInfo = Field(default_factory=FinancialInfo)
    additional_info: AdditionalInfo = Field(default_factory=AdditionalInfo)


# --- Server-owned records ---


class Decision(WireModel):
    status: ApplicationStatus | None = None
    decision_date: datetime | None = None
    decision_reason: str | None = None
    decision_notes: str | None = None


class ApplicationMessage(WireModel):
    text: str = Field(alias="message")
    is_from_landlord: bool = False
    timestamp: datetime | None = None
    sender: str | dict[str, Any] | None = None


class RentalApplication(WireModel):
    id: str = Field(alias="_id")
    status: ApplicationStatus = ApplicationStatus.pending
    application_date: datetime | None = None
    listing: str | dict[str, Any] | None = Field(default=None, alias="property")

    personal_info: PersonalInfo | None = None
    employment: Employment | None = None
    rental_info: RentalInfo | None = None
    financial_info: FinancialInfo | None = None
    additional_info: AdditionalInfo | None = None

    decision: Decision | None = None
    messages: list[ApplicationMessage] = Field(default_factory=list)

    @property
    def applicant_name(self) -> str:
        if not self.personal_info:
            return ""
        return f"{self.personal_info.first_name} {self.personal_info.last_name}".strip()

    @property
    def listing_title(self) -> str | None:
        if isinstance(self.listing, dict):
            return self.listing.get("title")
        return None


class Pagination(WireModel):
    current: int = 1
    pages: int = 1
    total: int = 0

    @property
    def has_next(self) -> bool:
        return self.current < self.pages

    @property
    def has_previous(self) -> bool:
        return self.current > 1


class ApplicationPage(WireModel):
    applications: list[RentalApplication] = Field(default_factory=list)
    pagination: Pagination = Field(default_factory=Pagination)


# --- Properties ---


class PropertyDetails(WireModel):
    bedrooms: float | None = None
    bathrooms: float | None = None
    square_feet: float | None = None
    square_meters: float | None = None
    year_built: int | None = None
    parking_spaces: int | None = None


class PropertyAddress(Address):
    neighborhood: str | None = None


class Property(WireModel):
    id: str = Field(alias="_id")
    title: str = ""
    description: str | None = None
    property_type: str | None = None
    listing_type: str | None = None
    status: str | None = None
    price: float | None = None
    currency: str = "USD"
    rent_period: str | None = None
    address: PropertyAddress | None = None
    details: PropertyDetails | None = None
    features: list[str] = Field(default_factory=list)
    amenities: list[str] = Field(default_factory=list)
    is_featured: bool = False


class PropertyPagination(WireModel):
    current_page: int = 1
    total_pages: int = 1
    total_items: int = 0
    items_per_page: int | None = None


class PropertyPage(WireModel):
    properties: list[Property] = Field(default_factory=list)
    pagination: PropertyPagination = Field(default_factory=PropertyPagination)


# --- Viewings ---


class ViewingRequest(WireModel):
    property_id: str
    preferred_date: IsoDay
    preferred_time: str = Field(..., pattern=r"^\d{2}:\d{2}$")
    message: str | None = None
    contact_method: Literal["email", "phone"] = "email"


class Appointment(WireModel):
    id: str = Field(alias="_id")
    title: str = ""
    description: str | None = None
    type: str | None = None
    status: str = "pending"
    start_time: datetime | None = None
    end_time: datetime | None = None
    duration: int | None = None
    listing: str | dict[str, Any] | None = Field(default=None, alias="property")
