"""
Модуль управления конфигурацией для MoodEmoji.

Обрабатывает:
- Сохранение настроек (INI файл)
- Валидацию и дополнение недостающих ключей
- Определение адреса сервиса (окружение > production > локальный)
- Singleton экземпляр ConfigManager (создаётся лениво)
"""

import configparser
import os
from typing import Final, Optional

# ===== КОНСТАНТЫ =====
CONFIG_FILE: Final[str] = "settings.ini"
API_URL_ENV: Final[str] = "MOODEMOJI_API_URL"  # Переопределение адреса из окружения деплоя

DEFAULT_CONFIG: Final[dict] = {
    "API": {
        "BaseURL": "http://localhost:5000",                                        # Локальный backend
        "ProductionURL": "https://emoji-sentiment-predictor-backend.onrender.com",
        "Production": "False",
        "TimeoutSeconds": "10"
    },
    "USER": {
        "WindowX": "100",
        "WindowY": "100",
        "WindowWidth": "520",
        "WindowHeight": "720",
        "HapticFeedback": "True",
        "ShowHistory": "False"
    }
}


# ===== МЕНЕДЖЕР КОНФИГУРАЦИИ =====

class ConfigManager:
    """
    Управляет конфигурацией приложения с автоматической валидацией и сохранением.
    Потокобезопасность: Этот класс НЕ потокобезопасен. Используйте get_config().
    """

    def __init__(self, config_file: str = CONFIG_FILE):
        self.config_file = config_file
        self.config = configparser.ConfigParser()
        # Сохраняем регистр ключей (BaseURL, а не baseurl)
        self.config.optionxform = str

        if not os.path.exists(self.config_file):
            self._create_default()
        else:
            self.config.read(self.config_file, encoding='utf-8')
            self._validate()

    def _create_default(self):
        """Создает файл конфигурации по умолчанию"""
        for section, options in DEFAULT_CONFIG.items():
            self.config[section] = options
        self._save()

    def _validate(self):
        """
        Валидирует целостность конфигурации и добавляет недостающие ключи.
        Критично для обратной совместимости при добавлении новых настроек.
        """
        changed = False

        for section, options in DEFAULT_CONFIG.items():
            if not self.config.has_section(section):
                self.config.add_section(section)
                changed = True

            for key, val in options.items():
                if not self.config.has_option(section, key):
                    self.config.set(section, key, val)
                    changed = True

        if changed:
            self._save()

    def _save(self):
        """Сохраняет конфигурацию на диск"""
        with open(self.config_file, 'w', encoding='utf-8') as f:
            self.config.write(f)

    def get(self, section: str, key: str, fallback=None) -> str:
        """Получает значение конфигурации как строку"""
        return self.config.get(section, key, fallback=fallback)

    def get_bool(self, section: str, key: str, fallback=False) -> bool:
        """Получает значение конфигурации как boolean"""
        return self.config.getboolean(section, key, fallback=fallback)

    def get_float(self, section: str, key: str, fallback: float = 0.0) -> float:
        """Получает значение как float, невалидные значения заменяются fallback"""
        try:
            return self.config.getfloat(section, key, fallback=fallback)
        except ValueError:
            return fallback

    def set(self, section: str, key: str, value) -> None:
        """
        Обновляет значение конфигурации и сохраняет на диск.
        Примечание: Каждый set() вызывает файловый I/O.
        """
        if not self.config.has_section(section):
            self.config.add_section(section)

        self.config.set(section, key, str(value))
        self._save()

    # ===== API =====

    def api_base_url(self) -> str:
        """
        Адрес сервиса классификации.

        Приоритет:
        1. Переменная окружения MOODEMOJI_API_URL
        2. [API] ProductionURL если [API] Production = True
        3. [API] BaseURL
        """
        url = os.environ.get(API_URL_ENV, "").strip()
        if not url:
            if self.get_bool("API", "Production", False):
                url = self.get("API", "ProductionURL", DEFAULT_CONFIG["API"]["ProductionURL"])
            else:
                url = self.get("API", "BaseURL", DEFAULT_CONFIG["API"]["BaseURL"])
        return url.strip().rstrip("/")

    def api_timeout(self) -> float:
        timeout = self.get_float("API", "TimeoutSeconds", 10.0)
        return timeout if timeout > 0 else 10.0


# ===== SINGLETON ЭКЗЕМПЛЯР =====

_cfg: Optional[ConfigManager] = None


def get_config() -> ConfigManager:
    """
    Возвращает общий ConfigManager, создавая его при первом обращении.

    КРИТИЧНО: Используйте эту функцию вместо создания новых экземпляров
    чтобы избежать избыточного файлового I/O.
    """
    global _cfg
    if _cfg is None:
        _cfg = ConfigManager()
    return _cfg
