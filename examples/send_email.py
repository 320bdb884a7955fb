import os
import asyncio
from mailbreeze import ErrorKind, MailBreeze, MailBreezeError

# Load credentials from environment variables
if not os.getenv('MAILBREEZE_API_KEY'):
    raise ValueError("Environment variable MAILBREEZE_API_KEY must be set")

SENDER = os.getenv('MAILBREEZE_SENDER', 'hello@example.com')
RECIPIENT = os.getenv('MAILBREEZE_RECIPIENT', 'user@example.com')

client = MailBreeze.from_env(max_retries=5)


async def send_welcome_email():
    """Send one email, then look it up again"""
    async with client:
        try:
            result = await client.emails.send(
                from_=SENDER,
                to=[RECIPIENT],
                subject="Welcome!",
                html="<h1>Welcome</h1><p>Thanks for signing up.</p>",
                tags=["welcome"],
            )
        except MailBreezeError as e:
            if e.kind is ErrorKind.VALIDATION:
                for field, messages in e.errors.items():
                    print(f"{field}: {', '.join(messages)}")
                return
            raise
        print(f"Sent message {result.message_id}")

        email = await client.emails.get(result.message_id)
        print(f"Status: {email.status.value}")

        stats = await client.emails.stats()
        print(f"Sent {stats.sent} of {stats.total} ({stats.success_rate}% success)")

if __name__ == "__main__":
    asyncio.run(send_welcome_email())
