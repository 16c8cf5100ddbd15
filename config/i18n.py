"""
User-facing message catalogue.

Log records stay in English; everything printed to the operator goes through t().
"""

from .settings import CURRENT_LANGUAGE

LANG = {
    "ru": {
        "banner": "Отправка ping-запросов....",
        "finished": "Завершено",
        "stop": "Остановка после текущего раунда...",
        "err_no_target": "Необходимо указать цель",
        "err_parse_timeout": "Не удалось разобрать значение таймаута",
        "err_parse_ttl": "Не удалось разобрать значение TTL",
        "err_parse_rate": "Не удалось разобрать значение частоты",
        "err_parse_size": "Не удалось разобрать значение размера буфера",
        "err_invalid_ttl": "Недопустимое значение TTL: {value} (ожидается 1-255)",
        "err_invalid_rate": "Недопустимое значение частоты: {value} (не может быть отрицательным)",
        "err_invalid_timeout": "Недопустимое значение таймаута: {value} (должно быть больше нуля)",
        "err_missing_commands": "Не найдены системные команды: {cmds}",
        "install_commands_hint": "Установите недостающие команды:",
        "usage_line_1": "Использование: multiping [-l размер] [-f] [-i TTL] [-r частота]",
        "usage_line_2": "                 [-w таймаут] цель[,цель2][,цельN]",
        "usage_options": "Параметры:",
        "usage_opt_l": "    -l размер      Размер буфера отправки.",
        "usage_opt_f": "    -f             Установить флаг Don't Fragment (только IPv4).",
        "usage_opt_i": "    -i TTL         Время жизни. (по умолчанию 64)",
        "usage_opt_r": "    -r частота     Интервал между пингами. (по умолчанию 1000мс).",
        "usage_opt_w": "    -w таймаут     Таймаут ожидания ответа в миллисекундах. (по умолчанию 4000мс)",
    },
    "en": {
        "banner": "Sending ping(s)....",
        "finished": "Finished",
        "stop": "Stopping after the current round...",
        "err_no_target": "Must specify target",
        "err_parse_timeout": "Unable to parse value for timeout",
        "err_parse_ttl": "Unable to parse value for TTL",
        "err_parse_rate": "Unable to parse value for rate",
        "err_parse_size": "Unable to parse value for send buffer size",
        "err_invalid_ttl": "Invalid value for TTL: {value} (expected 1-255)",
        "err_invalid_rate": "Invalid value for rate: {value} (must not be negative)",
        "err_invalid_timeout": "Invalid value for timeout: {value} (must be positive)",
        "err_missing_commands": "Required system commands not found: {cmds}",
        "install_commands_hint": "Install the missing commands:",
        "usage_line_1": "Usage: multiping [-l size] [-f] [-i TTL] [-r rate]",
        "usage_line_2": "                 [-w timeout] target_name[,target2_name][,targetXXX_name]",
        "usage_options": "Options:",
        "usage_opt_l": "    -l size        Send buffer size.",
        "usage_opt_f": "    -f             Set Don't Fragment flag in packet (IPv4-only).",
        "usage_opt_i": "    -i TTL         Time To Live. (64 default)",
        "usage_opt_r": "    -r rate        Rate of pings. (1000ms default).",
        "usage_opt_w": "    -w timeout     Timeout in milliseconds to wait for each reply. (4000ms default)",
    },
}


def t(key: str) -> str:
    return LANG.get(CURRENT_LANGUAGE, LANG["en"]).get(key, key)
