"""
Verificación del secreto compartido que protege las rutas de moderación.

Sin sesión ni tokens: se evalúa en cada petición.
"""
import hmac
from typing import Optional

from faqboard.core.exceptions import AuthorizationError


class AdminGate:
    def __init__(self, password: Optional[str]) -> None:
        self._password = password or ""

    @property
    def enabled(self) -> bool:
        return bool(self._password)

    def authorize(self, supplied: Optional[str]) -> bool:
        """True sólo si `supplied` coincide exactamente con la contraseña configurada.

        Sin contraseña configurada, o con un valor vacío, siempre es False.
        """
        if not self._password or not supplied:
            return False
        return hmac.compare_digest(supplied.encode("utf-8"), self._password.encode("utf-8"))

    def require(self, supplied: Optional[str]) -> None:
        if not self.authorize(supplied):
            raise AuthorizationError()
