from pydantic import BaseModel, EmailStr, Field


class ContactDetails(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    phone: str = Field(min_length=1)
    address: str = Field(min_length=1)


class PlaceOrderResponse(BaseModel):
    order_id: int
    order_token: str
    message: str = "Order placed successfully."
    track_order_url: str
