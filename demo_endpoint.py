"""
Quick demo script to try the /api/search endpoints.

This script starts a local server and shows how to make requests to it.
"""

import uvicorn

if __name__ == "__main__":
    print("=" * 60)
    print("Starting Certification Search Backend Demo")
    print("=" * 60)
    print()
    print("📌 API Endpoints:")
    print("   - Health Check:    GET  http://localhost:8000/health")
    print("   - Keyword search:  GET  http://localhost:8000/api/search?query=azure")
    print("   - PDI search:      POST http://localhost:8000/api/search")
    print("   - API Docs:             http://localhost:8000/docs")
    print()
    print("🔑 Requires GEMINI_API_KEY in the environment or .env")
    print()
    print("📝 Test with curl:")
    print('   curl "http://localhost:8000/api/search?query=aws&level=Iniciante"')
    print('   curl -X POST "http://localhost:8000/api/search" \\')
    print('     -H "Content-Type: application/json" \\')
    print('     -d \'{"hardSkills": [{"name": "Python", "level": 1}]}\'')
    print()
    print("=" * 60)
    print("Starting server on http://localhost:8000")
    print("Press Ctrl+C to stop")
    print("=" * 60)
    print()

    uvicorn.run(
        "certsearch.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
