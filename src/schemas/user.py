"""User schemas."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    """Create a new user. Required fields are checked by the handler."""

    nombre: str | None = Field(None, max_length=255)
    correo_electronico: str | None = Field(None, max_length=255)
    contrasena: str | None = Field(None, max_length=128)
    descripcion: str | None = Field(None, max_length=1024)


class UserUpdate(BaseModel):
    """Update a user. Omitted fields keep their stored value."""

    nombre: str | None = Field(None, max_length=255)
    correo_electronico: str | None = Field(None, max_length=255)
    contrasena: str | None = Field(None, max_length=128)
    descripcion: str | None = Field(None, max_length=1024)


class UserResponse(BaseModel):
    """Public projection of a user. Never carries the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    nombre: str = Field(validation_alias=AliasChoices("nombre", "name"))
    correo_electronico: str = Field(validation_alias=AliasChoices("correo_electronico", "email"))
    descripcion: str | None = Field(
        validation_alias=AliasChoices("descripcion", "description")
    )


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str


class UserCreatedResponse(MessageResponse):
    """Acknowledgement for a created user."""

    usuario: UserResponse
