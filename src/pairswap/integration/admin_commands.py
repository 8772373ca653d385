"""
Signed administrative commands.

Imperative-shell wrapper that lets an operator drive the administrative
entry points of a ``Pool`` with BLS12-381 signed envelopes:

    {
        "command": "pause" | "unpause" | "grant_role" | "revoke_role",
        "caller": "0x<48-byte pubkey>",
        "nonce": <int>,
        "args": {...},
        "signature": "0x<96-byte G2 signature>",
    }

Signing scheme: sign SHA256( domain_sep(f"pairswap_admin:{chain_id}", v1) ||
canonical_json_bytes({"command", "caller", "nonce", "args"}) ) over the
canonicalized fields (lowercase 0x-prefixed hex for caller and identity).

Nonces are per caller and strictly increasing; a nonce is consumed once the
signature verifies, whether or not the command then succeeds. Role-command
identities are canonicalized like the caller.
"""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from py_ecc.bls import G2Basic

from ..core.errors import Unauthorized
from ..core.pool import Pool
from ..core.types import Role
from ..state.balances import PubKey
from ..state.canonical import (
    canonical_hex_fixed_allow_0x,
    canonical_json_bytes,
    domain_sep_bytes,
    hex_to_bytes_allow_0x,
)

logger = logging.getLogger(__name__)

PUBKEY_BYTES = 48
SIGNATURE_BYTES = 96

COMMANDS = frozenset({"pause", "unpause", "grant_role", "revoke_role"})
_ROLE_COMMANDS = frozenset({"grant_role", "revoke_role"})


@dataclass(frozen=True)
class AdminCommand:
    command: str
    caller: PubKey
    nonce: int
    args: Mapping[str, Any] = field(default_factory=dict)
    signature: Optional[str] = None

    def signing_dict(self) -> Dict[str, Any]:
        return {
            "command": self.command,
            "caller": self.caller,
            "nonce": self.nonce,
            "args": dict(self.args),
        }


def parse_admin_command(obj: Any) -> AdminCommand:
    """
    Parse and canonicalize an envelope.

    Raises:
        ValueError: If the envelope is malformed
    """
    if not isinstance(obj, Mapping):
        raise ValueError("admin command must be an object")
    unknown = sorted(set(obj) - {"command", "caller", "nonce", "args", "signature"})
    if unknown:
        raise ValueError(f"admin command has unknown keys: {unknown}")

    command = obj.get("command")
    if command not in COMMANDS:
        raise ValueError(f"unsupported admin command: {command!r}")

    try:
        caller = canonical_hex_fixed_allow_0x(obj.get("caller"), nbytes=PUBKEY_BYTES, name="caller")
    except TypeError as exc:
        raise ValueError(str(exc)) from exc

    nonce = obj.get("nonce")
    if not isinstance(nonce, int) or isinstance(nonce, bool) or nonce < 0:
        raise ValueError("nonce must be a non-negative int")

    args = obj.get("args", {})
    if not isinstance(args, Mapping):
        raise ValueError("args must be an object")
    if command in _ROLE_COMMANDS:
        if set(args) != {"role", "identity"}:
            raise ValueError(f"{command} takes exactly 'role' and 'identity'")
        Role(args["role"])
        try:
            identity = canonical_hex_fixed_allow_0x(args["identity"], nbytes=PUBKEY_BYTES, name="identity")
        except TypeError as exc:
            raise ValueError(str(exc)) from exc
        args = {"role": args["role"], "identity": identity}
    elif args:
        raise ValueError(f"{command} takes no args")

    signature = obj.get("signature")
    if signature is not None and not isinstance(signature, str):
        raise ValueError("signature must be a hex string")

    return AdminCommand(command=command, caller=caller, nonce=nonce, args=dict(args), signature=signature)


def signing_hash(cmd: AdminCommand, *, chain_id: str) -> bytes:
    msg = domain_sep_bytes(f"pairswap_admin:{chain_id}", version=1) + canonical_json_bytes(cmd.signing_dict())
    return hashlib.sha256(msg).digest()


def sign_admin_command(cmd: AdminCommand, secret_key: int, *, chain_id: str) -> Dict[str, Any]:
    """Return the signed envelope for cmd (operator tooling and tests).

    The payload is canonicalized first, so the signature covers the same bytes
    the processor verifies.
    """
    cmd = parse_admin_command(cmd.signing_dict())
    sig = G2Basic.Sign(secret_key, signing_hash(cmd, chain_id=chain_id))
    envelope = cmd.signing_dict()
    envelope["signature"] = "0x" + sig.hex()
    return envelope


def verify_admin_signature(cmd: AdminCommand, *, chain_id: str) -> bool:
    if cmd.signature is None:
        return False
    try:
        pubkey = hex_to_bytes_allow_0x(cmd.caller, name="caller", nbytes=PUBKEY_BYTES)
        sig = hex_to_bytes_allow_0x(cmd.signature, name="signature", nbytes=SIGNATURE_BYTES)
    except ValueError:
        return False
    try:
        return bool(G2Basic.Verify(pubkey, signing_hash(cmd, chain_id=chain_id), sig))
    except Exception as exc:
        # py_ecc raises on points that are not on the curve.
        logger.debug("admin signature rejected for %s: %s", cmd.caller, exc)
        return False


class AdminCommandProcessor:
    """Verifies signed envelopes and applies them to one pool."""

    def __init__(self, pool: Pool) -> None:
        self.pool = pool
        self._last_nonce: Dict[PubKey, int] = {}

    @property
    def chain_id(self) -> str:
        return self.pool.config.chain_id

    def last_nonce(self, caller: PubKey) -> Optional[int]:
        return self._last_nonce.get(caller)

    def submit(self, envelope: Any) -> Any:
        """
        Apply one signed envelope. Returns what the pool entry point returns.

        Raises:
            ValueError: Malformed envelope or replayed nonce
            Unauthorized: Missing/invalid signature, or caller lacks the role
        """
        cmd = parse_admin_command(envelope)
        if not verify_admin_signature(cmd, chain_id=self.chain_id):
            raise Unauthorized(cmd.caller, "valid admin signature")

        last = self._last_nonce.get(cmd.caller)
        if last is not None and cmd.nonce <= last:
            raise ValueError(f"replayed nonce {cmd.nonce} for {cmd.caller} (last {last})")
        # Consumed before dispatch: a rejected command cannot be replayed later.
        self._last_nonce[cmd.caller] = cmd.nonce

        if cmd.command == "pause":
            result = self.pool.pause(cmd.caller)
        elif cmd.command == "unpause":
            result = self.pool.unpause(cmd.caller)
        elif cmd.command == "grant_role":
            result = self.pool.grant_role(cmd.caller, Role(cmd.args["role"]), cmd.args["identity"])
        else:
            result = self.pool.revoke_role(cmd.caller, Role(cmd.args["role"]), cmd.args["identity"])

        logger.info("admin command %s from %s applied (nonce %d)", cmd.command, cmd.caller, cmd.nonce)
        return result
