"""Seed a running agent market with demo users, agents and purchases."""
import asyncio
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import httpx

BASE_URL = os.environ.get("AGENT_MARKET_URL", "http://localhost:3000/api")

CREATOR = "0x" + "B" * 40
BUYERS = ["0x" + "C" * 40, "0x" + "D" * 40]

AGENTS = [
    {
        "name": "Web Researcher",
        "description": "Searches the web and summarises the top sources",
        "model": "gpt-4o",
        "capabilities": ["search", "summarize"],
        "price": 5,
        "is_for_sale": True,
        "external_id": 1,
    },
    {
        "name": "Code Reviewer",
        "description": "Reviews pull requests for bugs and style issues",
        "model": "claude-sonnet",
        "capabilities": ["code_analysis", "security_scan"],
        "price": 12.5,
        "is_for_sale": True,
        "external_id": 2,
    },
    {
        "name": "Private Notes",
        "description": "Personal note-taking agent, not listed",
        "model": "gpt-4o-mini",
        "capabilities": ["notes"],
    },
]


async def seed():
    async with httpx.AsyncClient(timeout=30) as client:
        print("=== Seeding Agent Market ===\n")

        created = []
        for config in AGENTS:
            resp = await client.post(
                f"{BASE_URL}/agents",
                json={**config, "creator_wallet_address": CREATOR},
            )
            if resp.status_code == 201:
                agent = resp.json()
                created.append(agent)
                print(f"  Created: {agent['name']} (ID: {agent['id'][:8]}...)")
            else:
                print(f"  Skipped {config['name']}: {resp.status_code} {resp.text}")

        print()
        for buyer in BUYERS:
            for agent in created:
                if not agent["is_for_sale"]:
                    continue
                resp = await client.post(
                    f"{BASE_URL}/agents/buy",
                    json={"agent_id": agent["id"], "buyer_wallet_address": buyer},
                )
                print(f"  {buyer[:10]}... buys {agent['name']}: {resp.status_code}")

        print("\n=== Seeding complete ===")


if __name__ == "__main__":
    asyncio.run(seed())
