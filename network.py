"""
Модуль сетевых операций для MoodEmoji.

Обрабатывает:
- HTTP запрос к сервису классификации (POST {base_url}/predict)
- Разбор успешного ответа и payload ошибки
- Преобразование исключений в tagged outcome (Ok / Err)

КРИТИЧНО:
- POST никогда не повторяется автоматически (session_predict создаётся с Retry(total=0))
- base_url передаётся извне (config / окружение), в коде не зашит
"""
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry
import datetime
from typing import Any, List, Optional

from errors import PredictionError, ServiceError, TransportError
from models import Err, Ok, Outcome, PredictionResult, Sentiment

# ===== НАСТРОЙКИ ОТЛАДКИ =====
DEBUG_NETWORK = False  # <--- ВКЛЮЧИТЕ True, ЧТОБЫ ПОКАЗАТЬ ЛОГИ В КОНСОЛИ
#DEBUG_NETWORK = True

# ===== КОНСТАНТЫ =====
DEFAULT_TIMEOUT = 10  # seconds
PREDICT_PATH = "/predict"
SERVICE_FALLBACK_MESSAGE = "Failed to get prediction"
TRANSPORT_FALLBACK_MESSAGE = "Connection error. Is backend deployed?"


# ===== УПРАВЛЕНИЕ СЕССИЯМИ =====
def _log_response(response, *args, **kwargs):
    """Hook: печатает запрос и ответ с временем выполнения"""
    now = datetime.datetime.now()
    start_time = now - response.elapsed

    method = response.request.method
    url = response.url
    if len(url) > 250:
        url = url[:247] + "..."

    print(f"[{start_time.strftime('%H:%M:%S.%f')[:-3]}] 🌐 -> REQ: {method} {url}")
    print(f"[{now.strftime('%H:%M:%S.%f')[:-3]}] 📥 <- RES: {response.status_code} (took {response.elapsed.total_seconds():.3f}s)")


def _create_session(max_retries=2, backoff_factor=0.2):
    """Создает HTTP session с логгером и retry стратегией"""
    session = requests.Session()

    retry_strategy = Retry(
        total=max_retries,
        backoff_factor=backoff_factor,
        status_forcelist=[429, 502, 503, 504],
        allowed_methods=["HEAD", "GET", "OPTIONS"]
    )

    adapter = HTTPAdapter(
        max_retries=retry_strategy,
        pool_connections=2,
        pool_maxsize=4
    )

    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.headers.update({
        "User-Agent": "MoodEmoji/1.0 (Desktop App; Python/requests)"
    })

    if DEBUG_NETWORK:
        session.hooks['response'] = [_log_response]

    return session


# Глобальная сессия для переиспользования соединений
# КРИТИЧНО: max_retries=0. allowed_methods ограничивает только read/status повторы,
# ошибки соединения urllib3 повторяет для любого метода, включая POST.
# Предсказание - ровно одна попытка, без ожидания backoff.
session_predict = _create_session(max_retries=0)
_sessions: List[requests.Session] = [session_predict]


def close_all_sessions():
    """Закрывает все HTTP сессии (вызывается при выходе)"""
    for session in _sessions:
        try:
            session.close()
        except Exception:
            pass


# ===== РАЗБОР ОТВЕТОВ =====
def parse_prediction(payload: Any) -> PredictionResult:
    """
    Валидирует тело успешного ответа.

    Ожидается: {"emoji": str, "sentiment": "positive"|"neutral"|"negative",
                "confidence": число в [0, 1]}

    Raises:
        TransportError: если payload не соответствует формату
    """
    if not isinstance(payload, dict):
        raise TransportError(f"Unexpected response body: {payload!r}")

    emoji = payload.get("emoji")
    if not isinstance(emoji, str):
        raise TransportError("Response is missing 'emoji'")

    try:
        sentiment = Sentiment(payload.get("sentiment"))
    except ValueError:
        raise TransportError(f"Unknown sentiment: {payload.get('sentiment')!r}")

    confidence = payload.get("confidence")
    # bool - подкласс int, но не является числом уверенности
    if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
        raise TransportError(f"Invalid confidence: {confidence!r}")
    if not 0.0 <= confidence <= 1.0:
        raise TransportError(f"Confidence out of range: {confidence!r}")

    return PredictionResult(emoji=emoji, sentiment=sentiment, confidence=float(confidence))


def parse_error_message(response) -> str:
    """
    Извлекает сообщение из payload ошибки {"error": "..."}.

    Returns:
        Текст ошибки или SERVICE_FALLBACK_MESSAGE если тело пустое/невалидное
    """
    try:
        payload = response.json()
    except (ValueError, requests.RequestException):
        return SERVICE_FALLBACK_MESSAGE

    if isinstance(payload, dict):
        message = payload.get("error")
        if isinstance(message, str) and message:
            return message
    return SERVICE_FALLBACK_MESSAGE


# ===== КЛИЕНТ =====
class PredictionClient:
    """
    Клиент сервиса классификации настроения слова.

    Один вызов predict() = один POST запрос, без повторов и отмены.
    """

    def __init__(self, base_url: str,
                 session: Optional[requests.Session] = None,
                 timeout: float = DEFAULT_TIMEOUT):
        """
        Args:
            base_url: Адрес сервиса без завершающего слэша (http://localhost:5000)
            session: HTTP сессия (по умолчанию глобальная session_predict)
            timeout: Таймаут запроса в секундах
        """
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else session_predict
        self.timeout = timeout

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}{PREDICT_PATH}"

    def fetch(self, canonical: str) -> PredictionResult:
        """
        Выполняет запрос предсказания.

        Raises:
            ServiceError: сервис ответил не-2xx
            TransportError: сеть недоступна или ответ невалиден
        """
        try:
            resp = self.session.post(
                self.endpoint,
                json={"word": canonical},
                headers={"Content-Type": "application/json"},
                timeout=self.timeout
            )
        except requests.RequestException as e:
            raise TransportError(str(e)) from e

        if not 200 <= resp.status_code < 300:
            raise ServiceError(parse_error_message(resp), status_code=resp.status_code)

        try:
            payload = resp.json()
        except (ValueError, requests.RequestException) as e:
            raise TransportError(f"Invalid JSON in response: {e}") from e

        return parse_prediction(payload)

    def predict(self, canonical: str) -> Outcome:
        """
        Безопасная обёртка над fetch().

        Returns:
            Ok(result) или Err(kind, message) - исключения наружу не выходят
        """
        try:
            return Ok(self.fetch(canonical))
        except ServiceError as e:
            return Err(e.kind, e.message)
        except PredictionError as e:
            print(f"[ERROR] Prediction error: {e}")
            return Err(e.kind, TRANSPORT_FALLBACK_MESSAGE)
