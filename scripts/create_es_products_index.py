#!/usr/bin/env python3
"""
Create the Elasticsearch products index with raw HTTP (no Python ES client).
Use this when the index must exist before the API or workers start:
  python scripts/create_es_products_index.py
  python scripts/create_es_products_index.py --recreate

Reads ELASTICSEARCH_URL and PRODUCTS_INDEX from .env.
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import httpx

from catalog_graphql.config import get_settings
from catalog_graphql.search.elasticsearch_client import _products_index_mappings, _products_index_settings


def main():
    ap = argparse.ArgumentParser(description="Create the products index")
    ap.add_argument("--recreate", action="store_true", help="Delete the index first if it exists")
    args = ap.parse_args()

    settings = get_settings()
    base = settings.elasticsearch_url.rstrip("/")
    url = f"{base}/{settings.products_index}"
    body = {"settings": _products_index_settings(), "mappings": _products_index_mappings()}

    with httpx.Client(timeout=30.0, verify=settings.elasticsearch_verify_certs) as client:
        r = client.head(url)
        if r.status_code == 200:
            if not args.recreate:
                print(f"Index '{settings.products_index}' already exists. Use --recreate to drop and create it again.")
                return
            client.delete(url).raise_for_status()
            print(f"Deleted index '{settings.products_index}'.")
        r = client.put(url, json=body)
        if r.status_code not in (200, 201):
            print(f"Failed to create index: {r.status_code}")
            print(r.text[:500])
            sys.exit(1)
    print(f"Created index '{settings.products_index}'.")
    print("Run: python scripts/seed_products.py")


if __name__ == "__main__":
    main()
