"""
Ticket code generation

Codes are what attendees show (as QR) or read out at the gate, so the alphabet
drops the look-alike symbols 0/O and 1/I. Eight symbols from 32 give 2^40
codes; codes carry no structure and reveal nothing about event or buyer.
"""

import secrets
from typing import Iterable

from src.platform.exception.exceptions import DomainError


TICKET_CODE_ALPHABET = 'ABCDEFGHJKLMNPQRSTUVWXYZ23456789'
DEFAULT_TICKET_CODE_LENGTH = 8


def normalize_ticket_code(raw_code: str) -> str:
    return raw_code.strip().upper()


class TicketCodeGenerator:
    def __init__(self, *, length: int = DEFAULT_TICKET_CODE_LENGTH) -> None:
        if length < 1:
            raise DomainError('Ticket code length must be positive')
        self.length = length

    def generate(self) -> str:
        return ''.join(secrets.choice(TICKET_CODE_ALPHABET) for _ in range(self.length))

    def generate_batch(self, count: int, *, exclude: Iterable[str] = ()) -> list[str]:
        """`count` codes, distinct from each other and from `exclude`."""
        if count < 0:
            raise DomainError('Ticket code batch size cannot be negative')

        taken = set(exclude)
        codes: list[str] = []
        while len(codes) < count:
            code = self.generate()
            if code in taken:
                continue
            taken.add(code)
            codes.append(code)
        return codes

    @staticmethod
    def is_well_formed(code: str) -> bool:
        return bool(code) and all(symbol in TICKET_CODE_ALPHABET for symbol in code)
