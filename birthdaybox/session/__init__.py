from .gate import CredentialCheck, LoginResult, SessionGate, StaticPassphrase

__all__ = ["CredentialCheck", "LoginResult", "SessionGate", "StaticPassphrase"]
