"""Context about the user affected by the error."""

from __future__ import annotations

from types import MappingProxyType

from error_enhanced.core.enhancers.base import Enhancer
from error_enhanced.core.validation import ValidIP, ValidString, ValidStringList


class UserInfoEnhancer(Enhancer):
    _field_defaults = MappingProxyType(
        {
            "_user": "",
            "_session_id": "",
            "_roles": [],
            "_auth_token": "",
            "_ip_address": "",
            "_user_agent": "",
            "_action_history": [],
        }
    )

    def __init__(self) -> None:
        self._reset_fields()

    @property
    def user(self) -> str:
        return self._user

    @property
    def session_id(self) -> str:
        return self._session_id

    @property
    def roles(self) -> list[str]:
        return self._roles

    @property
    def auth_token(self) -> str:
        return self._auth_token

    @property
    def ip_address(self) -> str:
        return self._ip_address

    @property
    def user_agent(self) -> str:
        return self._user_agent

    @property
    def action_history(self) -> list[str]:
        return self._action_history

    def set_user(self, user: str) -> UserInfoEnhancer:
        self._user = self._validated(ValidString, "user", user)
        return self

    def set_session_id(self, session_id: str) -> UserInfoEnhancer:
        self._session_id = self._validated(ValidString, "session_id", session_id)
        return self

    def set_roles(self, roles: list[str]) -> UserInfoEnhancer:
        self._roles = self._validated(ValidStringList, "roles", roles)
        return self

    def set_auth_token(self, token: str) -> UserInfoEnhancer:
        self._auth_token = self._validated(ValidString, "auth_token", token)
        return self

    def set_ip_address(self, ip_address: str) -> UserInfoEnhancer:
        self._validated(ValidIP, "ip_address", ip_address)
        self._ip_address = ip_address
        return self

    def set_user_agent(self, user_agent: str) -> UserInfoEnhancer:
        self._user_agent = self._validated(ValidString, "user_agent", user_agent)
        return self

    def add_action_to_history(self, action: str) -> UserInfoEnhancer:
        """Append ``action``; the history is unbounded."""
        action = self._validated(ValidString, "action", action)
        self._action_history = [*self._action_history, action]
        return self
