# ren/utils/logger.py
# ---------------------------------------------------------------
# Минимальный логгер + сбор GL‑ошибок для отладки.
# ---------------------------------------------------------------

import logging


def init_logger():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    return logging.getLogger("ren")

logger = init_logger()

def drain_gl_errors(driver, context: str = "") -> list:
    """
    Вычитать все накопленные коды glGetError и вывести каждый в лог
    как предупреждение. Возвращает список кодов (пустой, если ошибок нет).
    """
    errors = []
    while True:
        err = driver.get_error()
        if not err:
            break
        errors.append(err)
        if context:
            logger.warning(f"gl error: 0x{err:04X} [{context}]")
        else:
            logger.warning(f"gl error: 0x{err:04X}")
    return errors
