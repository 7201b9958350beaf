"""
Quick API smoke script against a running server
"""

import asyncio
import sys

import httpx


async def test_api(base_url: str = "http://localhost:8001"):
    """Exercise the Review Credibility API endpoints"""
    
    print("Testing Review Credibility API...")
    print("=" * 50)
    
    async with httpx.AsyncClient(timeout=60.0) as client:
        print("\n1. Health check...")
        response = await client.get(f"{base_url}/health")
        print(f"Status: {response.status_code}")
        print(f"Response: {response.json()}")
        
        print("\n2. Preflight...")
        response = await client.options(f"{base_url}/analyze")
        print(f"Status: {response.status_code}")
        print(f"Allow-Methods: {response.headers.get('access-control-allow-methods')}")
        
        print("\n3. Single review...")
        response = await client.post(
            f"{base_url}/analyze",
            json={"reviewText": "La comida estaba deliciosa y el servicio fue rápido."}
        )
        print(f"Status: {response.status_code}")
        data = response.json()
        print(f"Language: {data.get('detectedLanguage')} (translated: {data.get('translatedForBedrock')})")
        print(f"Fake: {data.get('fakePercentage')}%  Sentiment: {data.get('sentimentScore')}/10")
        print(f"Verdict: {data.get('verdict')}  Signals: {data.get('signals')}")
        
        print("\n4. Shop aggregate...")
        response = await client.post(f"{base_url}/analyze", json={"shopName": "mcd"})
        print(f"Status: {response.status_code}")
        data = response.json()
        print(f"Shop: {data.get('shopName')}  Reviews: {data.get('reviewsAnalyzed')}")
        print(f"Fake: {data.get('fakePercentage')}%  Sentiment: {data.get('sentimentScore')}/10")
        print(f"Recommendation: {data.get('recommendation')}")
        print(f"Pros: {data.get('pros')}")
        print(f"Cons: {data.get('cons')}")
        
        print("\n5. Missing input...")
        response = await client.post(f"{base_url}/analyze", json={})
        print(f"Status: {response.status_code}")
        print(f"Response: {response.json()}")


if __name__ == "__main__":
    asyncio.run(test_api(*sys.argv[1:2]))
