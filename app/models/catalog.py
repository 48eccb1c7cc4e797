from pydantic import BaseModel


class Surgery(BaseModel):
    id: str
    name: str
    price: int  # Toman
    requires_hospital: bool = False


class Doctor(BaseModel):
    id: str
    name: str


class Consultant(BaseModel):
    id: str
    name: str


class Clinic(BaseModel):
    id: str
    name: str
    max_capacity: int


class BankCard(BaseModel):
    id: str
    masked_number: str
    owner_name: str
    bank_name: str = ""
