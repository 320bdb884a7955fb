import os
import asyncio
from mailbreeze import MailBreeze
from mailbreeze.models import ConsentType

API_KEY = os.getenv('MAILBREEZE_API_KEY')

if not API_KEY:
    raise ValueError("Environment variable MAILBREEZE_API_KEY must be set")


async def build_list(client: MailBreeze):
    mailing_list = await client.lists.create(name="Newsletter", description="Monthly product news")
    contacts = client.contacts(mailing_list.id)
    await contacts.create(
        email="ada@example.com",
        first_name="Ada",
        consent_type=ConsentType.EXPLICIT,
        consent_source="signup-form",
    )

    async for contact in contacts.iterate(limit=50):
        print(f"{contact.email}: {contact.status.value}")

    stats = await client.lists.stats(mailing_list.id)
    print(f"{stats.active_contacts} of {stats.total_contacts} contacts active")


FINISHED_STATUSES = {"completed", "failed", "cancelled"}


async def verify_addresses(client: MailBreeze, emails, poll_interval=2, max_polls=150):
    batch = await client.verification.batch(emails)
    for _ in range(max_polls):
        if batch.status in FINISHED_STATUSES:
            break
        await asyncio.sleep(poll_interval)
        batch = await client.verification.get(batch.verification_id)
    if batch.status != "completed":
        raise RuntimeError(f"Verification {batch.verification_id} ended as {batch.status!r}")
    return batch.results


async def main():
    # Stay well under the account's rate limit when walking big lists
    async with MailBreeze.builder(API_KEY).requests_per_second(5).build() as client:
        await build_list(client)
        results = await verify_addresses(client, ["ada@example.com", "nobody@invalid.example"])
        if results is not None:
            print(f"clean: {results.clean}, dirty: {results.dirty}")

if __name__ == "__main__":
    asyncio.run(main())
