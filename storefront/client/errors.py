"""Тексты ошибок для пользователя."""

NETWORK_ERROR_MESSAGE = "Check your internet connection."
SERVER_ERROR_MESSAGE = "We will fix it soon."
GENERIC_ERROR_MESSAGE = "failed, please try again."


def describe_error(error) -> str:
    """
    Текст ошибки вызова API для показа пользователю.

    Args:
        error: ClientError

    Returns:
        str: Нет ответа -> проверить соединение, 5xx -> исправим,
            иначе сообщение сервера или общий текст
    """
    status_code = getattr(error, "status_code", None)
    if status_code is None:
        return NETWORK_ERROR_MESSAGE
    if status_code >= 500:
        return SERVER_ERROR_MESSAGE
    return getattr(error, "message", None) or GENERIC_ERROR_MESSAGE
