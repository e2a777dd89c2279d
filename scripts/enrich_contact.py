import asyncio, sys, json
import httpx

async def main():
    if len(sys.argv) < 3:
        print("Usage: python scripts/enrich_contact.py \"<full name>\" <domain> [base_url]")
        raise SystemExit(1)
    full_name, domain = sys.argv[1], sys.argv[2]
    base_url = sys.argv[3] if len(sys.argv) > 3 else "http://localhost:8099"
    async with httpx.AsyncClient(timeout=120) as client:
        r = await client.post(f"{base_url}/api/enrich", json={"fullName": full_name, "domain": domain})
        r.raise_for_status()
        print(json.dumps(r.json(), indent=2))

if __name__ == "__main__":
    asyncio.run(main())
