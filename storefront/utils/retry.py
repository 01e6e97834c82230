# storefront/utils/retry.py
import smtplib

from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type


def smtp_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=5),
        retry=retry_if_exception_type((smtplib.SMTPException, OSError)),
    )
