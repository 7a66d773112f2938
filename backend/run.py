"""
Chạy Learning Platform API bằng uvicorn
(.env được load trong academy.config)
"""

import uvicorn

from academy.config import get_settings


def main():
    settings = get_settings()
    # Không in mật khẩu database
    print(f"Learning Platform API on {settings.HOST}:{settings.PORT}")
    print(f"   Database: {settings.database_url.rsplit('@', 1)[-1]}")
    print(f"   Mode: {'Development (reload)' if settings.DEBUG else 'Production'}")

    uvicorn.run(
        "academy.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        reload_includes=["*.py"],
    )


if __name__ == "__main__":
    main()
