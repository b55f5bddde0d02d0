import logging

import uvicorn
from dotenv import load_dotenv
load_dotenv()

from custom_fields_proxy.core.config import get_settings

if __name__ == "__main__":
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger(__name__).info(
        f"✅ Proxy running on http://localhost:{settings.port}/proxy-custom-fields"
    )
    uvicorn.run("custom_fields_proxy.app:app", host="0.0.0.0", port=settings.port)
