"""
Cliente Redis asíncrono con codificación JSON y fallback en memoria.

Si Redis no está disponible tras los reintentos, el cliente sigue
funcionando sobre un almacenamiento local del proceso (sin pub/sub).
"""

import asyncio
import fnmatch
import json
import logging
import time
from typing import Any, Dict, Iterable, List, Optional, Set

import redis.asyncio as redis

from config.configuration import configuration

logger = logging.getLogger(__name__)


def _decode(valor: Any) -> Any:
    if valor is None:
        return None
    try:
        return json.loads(valor)
    except (json.JSONDecodeError, TypeError):
        return valor


def _encode(valor: Any) -> Any:
    if isinstance(valor, (dict, list)):
        return json.dumps(valor, ensure_ascii=False)
    return valor


class RedisClient:
    """
    Wrapper sobre redis.asyncio.

    Guarda dicts y listas como JSON y los devuelve decodificados. Cada
    operación intenta Redis primero y cae al almacenamiento local si falla.
    """

    def __init__(
        self,
        redis_url: Optional[str] = None,
        max_retries: int = 3,
        retry_delay_seconds: float = 1.0,
    ):
        self.redis_url = redis_url or configuration.redis_url
        self.redis_client: Optional[redis.Redis] = None
        self._connected = False
        self._connect_attempted = False
        self._max_retries = max_retries
        self._retry_delay = retry_delay_seconds

        # Fallback local
        self._memory: Dict[str, Any] = {}
        self._memory_sets: Dict[str, Set[str]] = {}
        self._memory_expiry: Dict[str, float] = {}

    @property
    def is_connected(self) -> bool:
        return self._connected and self.redis_client is not None

    async def connect(self) -> None:
        """Conecta a Redis con reintentos y backoff lineal."""
        self._connect_attempted = True
        for intento in range(self._max_retries):
            try:
                self.redis_client = redis.from_url(
                    self.redis_url,
                    decode_responses=True,
                    socket_timeout=10,
                    socket_connect_timeout=10,
                )
                await self.redis_client.ping()
                self._connected = True
                logger.info("✅ Conectado a Redis")
                return
            except Exception as e:
                logger.warning(
                    f"⚠️ Intento {intento + 1}/{self._max_retries} - "
                    f"Error conectando a Redis: {e}"
                )
                if intento < self._max_retries - 1:
                    await asyncio.sleep(self._retry_delay * (intento + 1))

        self.redis_client = None
        self._connected = False
        logger.warning("⚠️ Modo fallback activado: usando memoria local")

    async def disconnect(self) -> None:
        if self.redis_client:
            try:
                await self.redis_client.aclose()
                logger.info("🔌 Desconectado de Redis")
            except Exception as e:
                logger.warning(f"⚠️ Error desconectando de Redis: {e}")
            finally:
                self.redis_client = None
                self._connected = False

    async def _ensure_connection(self) -> None:
        if not self._connect_attempted:
            await self.connect()

    async def ping(self) -> bool:
        """True si Redis responde."""
        await self._ensure_connection()
        if not self.is_connected:
            return False
        try:
            return bool(await self.redis_client.ping())
        except Exception as e:
            logger.warning(f"⚠️ Redis no responde al ping: {e}")
            return False

    def _purge_expired(self) -> None:
        ahora = time.time()
        for clave in [k for k, vence in self._memory_expiry.items() if ahora > vence]:
            self._memory.pop(clave, None)
            self._memory_expiry.pop(clave, None)

    # ==================== CLAVE / VALOR ====================

    async def set(self, key: str, value: Any, expire: Optional[int] = None) -> None:
        """Guarda un valor con TTL opcional."""
        await self._ensure_connection()
        codificado = _encode(value)

        if self.is_connected:
            try:
                await self.redis_client.set(key, codificado, ex=expire)
                logger.debug(f"💾 Guardado en Redis: {key}")
                return
            except Exception as e:
                logger.warning(f"⚠️ Error guardando en Redis, usando memoria local: {e}")

        self._memory[key] = codificado
        if expire:
            self._memory_expiry[key] = time.time() + expire
        else:
            self._memory_expiry.pop(key, None)

    async def get(self, key: str) -> Optional[Any]:
        """Obtiene y decodifica un valor; None si no existe."""
        await self._ensure_connection()

        if self.is_connected:
            try:
                return _decode(await self.redis_client.get(key))
            except Exception as e:
                logger.warning(f"⚠️ Error obteniendo de Redis, usando memoria local: {e}")

        self._purge_expired()
        return _decode(self._memory.get(key))

    async def get_many(self, keys: List[str]) -> Dict[str, Any]:
        """Obtiene varios valores; las claves inexistentes se omiten."""
        await self._ensure_connection()
        if not keys:
            return {}

        if self.is_connected:
            try:
                valores = await self.redis_client.mget(keys)
                return {
                    clave: _decode(valor)
                    for clave, valor in zip(keys, valores)
                    if valor is not None
                }
            except Exception as e:
                logger.warning(f"⚠️ Error obteniendo múltiples valores de Redis: {e}")

        self._purge_expired()
        return {
            clave: _decode(self._memory[clave]) for clave in keys if clave in self._memory
        }

    async def delete(self, key: str) -> None:
        await self._ensure_connection()
        if self.is_connected:
            try:
                await self.redis_client.delete(key)
                logger.debug(f"🗑️ Eliminado de Redis: {key}")
            except Exception as e:
                logger.warning(f"⚠️ Error eliminando de Redis: {e}")

        self._memory.pop(key, None)
        self._memory_expiry.pop(key, None)
        self._memory_sets.pop(key, None)

    async def keys(self, pattern: str) -> List[str]:
        """Claves que coinciden con un patrón glob de Redis."""
        await self._ensure_connection()
        if self.is_connected:
            try:
                return [
                    clave
                    async for clave in self.redis_client.scan_iter(match=pattern, count=100)
                ]
            except Exception as e:
                logger.warning(f"⚠️ Error escaneando claves en Redis: {e}")

        self._purge_expired()
        return [k for k in self._memory if fnmatch.fnmatchcase(k, pattern)]

    # ==================== CONJUNTOS ====================

    async def sadd(self, key: str, *members: str) -> None:
        await self._ensure_connection()
        if self.is_connected:
            try:
                await self.redis_client.sadd(key, *members)
                return
            except Exception as e:
                logger.warning(f"⚠️ Error en SADD, usando memoria local: {e}")
        self._memory_sets.setdefault(key, set()).update(members)

    async def srem(self, key: str, *members: str) -> None:
        await self._ensure_connection()
        if self.is_connected:
            try:
                await self.redis_client.srem(key, *members)
                return
            except Exception as e:
                logger.warning(f"⚠️ Error en SREM, usando memoria local: {e}")
        self._memory_sets.get(key, set()).difference_update(members)

    async def smembers(self, key: str) -> Set[str]:
        await self._ensure_connection()
        if self.is_connected:
            try:
                return set(await self.redis_client.smembers(key))
            except Exception as e:
                logger.warning(f"⚠️ Error en SMEMBERS, usando memoria local: {e}")
        return set(self._memory_sets.get(key, set()))

    # ==================== PUB/SUB ====================

    async def publish(self, channel: str, message: Dict[str, Any]) -> bool:
        """
        Publica un mensaje JSON en un canal.

        Returns:
            True si se publicó; False en modo fallback o ante error
        """
        await self._ensure_connection()
        if not self.is_connected:
            logger.debug(f"Pub/Sub no disponible en modo fallback: canal '{channel}' ignorado")
            return False

        try:
            await self.redis_client.publish(channel, json.dumps(message, default=str))
            logger.debug(f"📤 Mensaje publicado en canal '{channel}'")
            return True
        except Exception as e:
            logger.warning(f"⚠️ Error publicando en Redis canal '{channel}': {e}")
            return False


def member_keys(template: str, ids: Iterable[str]) -> List[str]:
    """Expande una plantilla de clave para cada ID."""
    return [template.format(i) for i in ids]
