import argparse
import uvicorn

from shared.config import config

SERVICES = {
    "flash-clock": "services.flash_clock.app:app",
}

def main():
    parser = argparse.ArgumentParser(description="Bootloader for the Flash Clock FastAPI service.")
    parser.add_argument("service", nargs="?", default="flash-clock", choices=SERVICES.keys(), help="Service to start")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind")
    parser.add_argument("--port", type=int, default=config.get("port", 7000), help="Port to bind")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload (dev mode)")
    args = parser.parse_args()

    app_path = SERVICES[args.service]
    print(f"[BOOTLOADER] Starting {args.service} on {args.host}:{args.port} ...")
    print(f"[BOOTLOADER] Manifest: http://localhost:{args.port}/manifest.json")
    print(f"[BOOTLOADER] VTT test: http://localhost:{args.port}/flashclock.vtt")
    uvicorn.run(app_path, host=args.host, port=args.port, reload=args.reload)

if __name__ == "__main__":
    main()
