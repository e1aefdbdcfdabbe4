"""
Loyalty Points API entry point.
"""
import os
import sys
import traceback

print("[LoyaltyAPI] ========================================")
print("[LoyaltyAPI] Starting Loyalty Points API")
print("[LoyaltyAPI] ========================================")

config_name = os.getenv('FLASK_ENV', 'development')
print(f"[LoyaltyAPI] Config: {config_name}")
print(f"[LoyaltyAPI] PORT: {os.getenv('PORT', 'not set')}")
print(f"[LoyaltyAPI] DATABASE_URL: {'set' if os.getenv('DATABASE_URL') else 'NOT SET'}")

try:
    from loyalty_api import create_app
    app = create_app(config_name)
    print(f"[LoyaltyAPI] Routes: {len(list(app.url_map.iter_rules()))}")
    print(f"[LoyaltyAPI] Use the base URL: http://127.0.0.1:{os.getenv('PORT', 8080)}/api for all endpoints.")
except Exception as e:
    print(f"[LoyaltyAPI] FATAL ERROR during app creation: {e}")
    traceback.print_exc()
    sys.exit(1)

if __name__ == '__main__':
    app.run(
        host='0.0.0.0',
        port=int(os.getenv('PORT', 8080)),
        debug=config_name == 'development'
    )
