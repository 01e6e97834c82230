# storefront/services/mail_service.py
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from storefront.celery_worker import celery_app
from storefront.utils import settings
from storefront.utils.logging import get_logger
from storefront.utils.retry import smtp_retry

logger = get_logger(__name__)


class MailService:
    """
    Outbound mail.
    Sending is queued on Celery so registration never waits on SMTP.
    """

    @staticmethod
    def send_activation_mail(to: str, link: str) -> None:
        try:
            send_activation_mail_task.delay(to, link)
        except Exception as e:
            # registration does not depend on the mail being queued
            logger.warning(f"Could not queue activation mail for {to}: {e}")


def build_activation_message(to: str, link: str) -> MIMEMultipart:
    msg = MIMEMultipart("alternative")
    msg["Subject"] = f"Account activation {settings.STORE_NAME}"
    msg["From"] = settings.SMTP_USER
    msg["To"] = to

    html = (
        "<div>"
        "<h1>Follow the link to activate your account</h1>"
        f'<a href="{link}">{link}</a>'
        "</div>"
    )
    msg.attach(MIMEText(link, "plain", "utf-8"))
    msg.attach(MIMEText(html, "html", "utf-8"))
    return msg


@smtp_retry()
def deliver(msg: MIMEMultipart) -> None:
    with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT, timeout=10) as server:
        server.starttls()
        if settings.SMTP_USER:
            server.login(settings.SMTP_USER, settings.SMTP_PASSWORD)
        server.send_message(msg)


@celery_app.task(name="storefront.services.mail_service.send_activation_mail_task")
def send_activation_mail_task(to: str, link: str):
    logger.info(f"[MAIL] Sending activation link to {to}")
    deliver(build_activation_message(to, link))
    return {"to": to, "status": "sent"}
