import smtplib
import logging
import time
from typing import List, Optional
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from email.utils import formataddr
from contextlib import contextmanager

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s]: %(message)s"
)


class EmailClient:
    """Reusable, fault-tolerant SMTP email client."""

    def __init__(
        self,
        smtp_host: str,
        smtp_port: int,
        username: Optional[str],
        password: Optional[str],
        use_ssl: bool = False,
        timeout: int = 30,
        max_retries: int = 3,
        retry_delay: int = 3
    ):
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.username = username
        self.password = password
        self.use_ssl = use_ssl
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_delay = retry_delay

    @contextmanager
    def _connection(self):
        """Context-managed SMTP connection."""
        server = None
        try:
            if self.use_ssl:
                server = smtplib.SMTP_SSL(
                    self.smtp_host, self.smtp_port, timeout=self.timeout)
            else:
                server = smtplib.SMTP(
                    self.smtp_host, self.smtp_port, timeout=self.timeout)
                server.starttls()
            # relay hosts without auth are allowed
            if self.username:
                server.login(self.username, self.password or "")
            yield server
        finally:
            if server:
                try:
                    server.quit()
                except smtplib.SMTPException as e:
                    logging.warning(f"Error closing SMTP connection: {e}")

    def _build_message(
        self,
        sender: str,
        sender_name: Optional[str],
        recipients: List[str],
        subject: str,
        text_body: str,
        html_body: Optional[str] = None,
        high_priority: bool = False
    ) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["From"] = formataddr((sender_name, sender)) if sender_name else sender
        msg["To"] = ", ".join(recipients)
        msg["Subject"] = subject
        if high_priority:
            msg["X-Priority"] = "1"
            msg["Importance"] = "High"

        msg.attach(MIMEText(text_body or "", "plain"))
        if html_body:
            msg.attach(MIMEText(html_body, "html"))
        return msg

    def send_email(
        self,
        sender: str,
        recipients: List[str],
        subject: str,
        text_body: str,
        html_body: Optional[str] = None,
        sender_name: Optional[str] = None,
        high_priority: bool = False
    ) -> bool:
        """Send an email with retries and logging."""
        if not self.smtp_host:
            logging.warning("SMTP host not configured, email not sent.")
            return False

        msg = self._build_message(
            sender, sender_name, recipients, subject, text_body, html_body, high_priority)

        for attempt in range(1, self.max_retries + 1):
            try:
                with self._connection() as server:
                    server.sendmail(sender, recipients, msg.as_string())
                logging.info(
                    f"Email sent successfully to {', '.join(recipients)}")
                return True
            except smtplib.SMTPAuthenticationError:
                logging.error(
                    "SMTP authentication failed, check username/password.")
                break
            except smtplib.SMTPConnectError:
                logging.error("Could not connect to SMTP server.")
            except (smtplib.SMTPException, OSError) as e:
                logging.error(f"Attempt {attempt} failed: {e}")
                if attempt < self.max_retries:
                    time.sleep(self.retry_delay)

        logging.error("Failed to send email after all retry attempts.")
        return False
