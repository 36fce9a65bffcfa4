"""FastAPI endpoints for users and their address books."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.identity.addresses import AddAddress, RemoveAddress, SetDefaultAddress
from storefront.identity.api.dependencies import current_principal
from storefront.identity.api.schemas import (
    AddAddressRequest,
    AddressIdResponse,
    AddressResponse,
    RegisteredUserResponse,
    RegisterUserRequest,
    StatusResponse,
    UpdateProfileRequest,
    UserResponse,
)
from storefront.identity.queries import get_address, get_default_address, get_user, list_addresses
from storefront.identity.registration import RegisterUser, UpdateProfile
from storefront.identity.tokens import Principal, get_token_verifier

user_router = APIRouter(prefix="/users", tags=["users"])
address_router = APIRouter(prefix="/addresses", tags=["addresses"])


def _user_response(user) -> UserResponse:
    return UserResponse(
        user_id=str(user.id),
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        roles=list(user.roles or []),
        enabled=user.enabled,
        created_at=user.created_at,
    )


def _address_response(address) -> AddressResponse:
    return AddressResponse(
        address_id=str(address.id),
        street=address.street,
        city=address.city,
        state=address.state,
        zip_code=address.zip_code,
        country=address.country,
        is_default=address.is_default,
    )


def _process_add_address(principal: Principal, body: AddAddressRequest) -> str:
    command = AddAddress(
        user_id=principal.user_id,
        street=body.street,
        city=body.city,
        state=body.state,
        zip_code=body.zip_code,
        country=body.country,
        is_default=body.is_default,
    )
    return current_domain.process(command, asynchronous=False)


# --- User endpoints ---


@user_router.post("", status_code=201, response_model=RegisteredUserResponse)
async def register_user(body: RegisterUserRequest) -> RegisteredUserResponse:
    command = RegisterUser(
        email=body.email,
        first_name=body.first_name,
        last_name=body.last_name,
    )
    user_id = current_domain.process(command, asynchronous=False)
    token = get_token_verifier().issue(get_user(user_id).as_principal())
    return RegisteredUserResponse(user_id=user_id, token=token)


@user_router.get("/me", response_model=UserResponse)
async def get_me(principal: Principal = Depends(current_principal)) -> UserResponse:
    return _user_response(get_user(principal.user_id))


@user_router.put("/me", response_model=UserResponse)
async def update_me(
    body: UpdateProfileRequest,
    principal: Principal = Depends(current_principal),
) -> UserResponse:
    command = UpdateProfile(
        user_id=principal.user_id,
        first_name=body.first_name,
        last_name=body.last_name,
    )
    current_domain.process(command, asynchronous=False)
    return _user_response(get_user(principal.user_id))


@user_router.get("/me/addresses", response_model=list[AddressResponse])
async def get_my_addresses(principal: Principal = Depends(current_principal)) -> list[AddressResponse]:
    return [_address_response(a) for a in list_addresses(principal.user_id)]


@user_router.post("/me/addresses", response_model=AddressResponse)
async def add_my_address(
    body: AddAddressRequest,
    principal: Principal = Depends(current_principal),
) -> AddressResponse:
    address_id = _process_add_address(principal, body)
    return _address_response(get_address(principal.user_id, address_id))


@user_router.delete("/me/addresses/{address_id}", status_code=204)
async def remove_my_address(address_id: str, principal: Principal = Depends(current_principal)) -> None:
    current_domain.process(RemoveAddress(user_id=principal.user_id, address_id=address_id), asynchronous=False)


# --- Address endpoints ---


@address_router.post("", status_code=201, response_model=AddressIdResponse)
async def add_address(
    body: AddAddressRequest,
    principal: Principal = Depends(current_principal),
) -> AddressIdResponse:
    return AddressIdResponse(address_id=_process_add_address(principal, body))


@address_router.get("", response_model=list[AddressResponse])
async def get_addresses(principal: Principal = Depends(current_principal)) -> list[AddressResponse]:
    return [_address_response(a) for a in list_addresses(principal.user_id)]


@address_router.get("/default", response_model=AddressResponse)
async def get_default(principal: Principal = Depends(current_principal)) -> AddressResponse:
    return _address_response(get_default_address(principal.user_id))


@address_router.put("/{address_id}/default", response_model=StatusResponse)
async def set_default(address_id: str, principal: Principal = Depends(current_principal)) -> StatusResponse:
    command = SetDefaultAddress(user_id=principal.user_id, address_id=address_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@address_router.delete("/{address_id}", status_code=204)
async def remove_address(address_id: str, principal: Principal = Depends(current_principal)) -> None:
    command = RemoveAddress(user_id=principal.user_id, address_id=address_id)
    current_domain.process(command, asynchronous=False)
