#!/usr/bin/env python3
"""
Venue Planner Runner Script
Provides easy ways to run different parts of the system
"""
import argparse
import sys
import subprocess
from config import config
from utils.exceptions import ConfigurationException

def require_valid_config():
    """Refuse to serve requests on labor defaults or timeouts that cannot work"""
    if not config.validate():
        raise ConfigurationException(
            "Invalid configuration; run `python run.py config` for details",
            error_code="INVALID_CONFIG"
        )

def run_web_server():
    """Run the web server"""
    require_valid_config()
    print("Starting Venue Planner Web Server...")
    print(f"Server will be available at: http://{config.app.host}:{config.app.port}")

    import uvicorn
    from database.models import db_manager

    db_manager.create_tables()
    uvicorn.run(
        "web.app:app",
        host=config.app.host,
        port=config.app.port,
        reload=config.app.debug,
        log_level="info"
    )

def run_demo():
    """Run the CLI demo against an in-memory property"""
    print("Running order validation demo...")
    from main import run_demo as demo
    demo()

def init_database():
    """Create database tables"""
    from database.models import db_manager

    print(f"Creating tables at {config.database.url}")
    db_manager.create_tables()
    return True

def seed_database():
    """Create tables and load the demo property"""
    from database.models import db_manager
    from database.seed import seed_demo_property

    db_manager.create_tables()
    session = db_manager.get_session()
    try:
        prop = seed_demo_property(session)
        print(f"Seeded property {prop.property_code} ({prop.name}) with id {prop.id}")
    finally:
        session.close()
    return True

def run_tests():
    """Run test suite"""
    print("Running Test Suite...")
    try:
        result = subprocess.run(["pytest", "-v"], capture_output=False)
        return result.returncode == 0
    except FileNotFoundError:
        print("pytest not installed. Install with: pip install -e .[test]")
        return False

def validate_config():
    """Validate configuration"""
    print("Validating Configuration...")

    if config.validate():
        print("Configuration is valid")
        print(f"Database: {config.database.url}")
        print(f"Default attendees per technician: {config.labor_defaults.attendees_per_tech}")
        print(f"Assistant function call limit: {config.assistant.max_function_calls}")
        return True
    else:
        print("Configuration validation failed")
        print("Check your environment variables and .env file")
        return False

def show_help():
    """Show help information"""
    print("""
Venue Planner - Order Validation & Labor Requirement Engine

Available commands:

  web         Start the web server interface
  demo        Run the CLI demo
  init-db     Create database tables
  seed        Create tables and load the demo property
  test        Run the test suite
  config      Validate configuration
  help        Show this help message

Examples:

  python run.py web          # Start web server
  python run.py seed         # Load demo data
  python run.py test         # Run tests
""")

def main():
    parser = argparse.ArgumentParser(
        description="Venue Planner Runner",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        "command",
        choices=["web", "demo", "init-db", "seed", "test", "config", "help"],
        help="Command to run"
    )

    if len(sys.argv) == 1:
        show_help()
        return

    args = parser.parse_args()

    print("Venue Planner - Order Validation & Labor Engine")
    print("=" * 60)

    try:
        if args.command == "web":
            run_web_server()
        elif args.command == "demo":
            run_demo()
        elif args.command == "init-db":
            success = init_database()
            sys.exit(0 if success else 1)
        elif args.command == "seed":
            success = seed_database()
            sys.exit(0 if success else 1)
        elif args.command == "test":
            success = run_tests()
            sys.exit(0 if success else 1)
        elif args.command == "config":
            success = validate_config()
            sys.exit(0 if success else 1)
        else:
            show_help()

    except KeyboardInterrupt:
        print("\nGoodbye!")
    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)

if __name__ == "__main__":
    main()
