"""Persisted login data and session cookie (authData.json)"""

import json
from dataclasses import dataclass, replace
from typing import Dict, Optional

AUTH_FILE_PATH = "authData.json"


@dataclass(frozen=True)
class SessionCredential:
    login: str
    password: str
    auth_cookie: Optional[Dict] = None

    def without_cookie(self):
        return replace(self, auth_cookie=None)

    def to_dict(self):
        return {"login": self.login, "senha": self.password, "authCookie": self.auth_cookie}

    @classmethod
    def from_dict(cls, data):
        return cls(
            login=data.get("login") or "",
            password=data.get("senha") or data.get("password") or "",
            auth_cookie=data.get("authCookie") or None,
        )


class SessionStore:
    def __init__(self, path=AUTH_FILE_PATH):
        self.path = path

    def load(self) -> Optional[SessionCredential]:
        """Load stored credentials. Missing or unreadable file means a full login."""
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            print(f"⚠️ No {self.path} found. A full login will be performed.")
            return None
        except (OSError, json.JSONDecodeError) as e:
            print(f"⚠️ Could not read {self.path} ({e}). A full login will be performed.")
            return None

        if not isinstance(data, dict):
            print(f"⚠️ Unexpected content in {self.path}. A full login will be performed.")
            return None

        return SessionCredential.from_dict(data)

    def save(self, credential):
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(credential.to_dict(), f, indent=2, ensure_ascii=False)
            print(f"Auth data saved to {self.path}")
        except OSError as e:
            print(f"❌ Error saving auth data to {self.path}: {e}")
