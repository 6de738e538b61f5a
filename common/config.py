# common/config.py
import os
from typing import Dict, Optional
from pydantic import BaseModel, Field
from dotenv import load_dotenv

# field name -> environment variable
ENV_VARS: Dict[str, str] = {
    "base_url": "SMS_PANEL_BASE_URL",
    "login_path": "SMS_PANEL_LOGIN_PATH",
    "numbers_path": "SMS_PANEL_NUMBERS_PATH",
    "messages_path": "SMS_PANEL_MESSAGES_PATH",
    "output_dir": "SMS_PANEL_OUTPUT_DIR",
    "headless": "SMS_PANEL_HEADLESS",
    "login_poll_interval_ms": "SMS_PANEL_LOGIN_POLL_MS",
    "login_settle_ms": "SMS_PANEL_LOGIN_SETTLE_MS",
    "login_nav_timeout_ms": "SMS_PANEL_LOGIN_NAV_TIMEOUT_MS",
    "view_timeout_ms": "SMS_PANEL_VIEW_TIMEOUT_MS",
    "table_wait_ms": "SMS_PANEL_TABLE_WAIT_MS",
    "widget_init_ms": "SMS_PANEL_WIDGET_INIT_MS",
    "numbers_settle_ms": "SMS_PANEL_NUMBERS_SETTLE_MS",
    "messages_settle_ms": "SMS_PANEL_MESSAGES_SETTLE_MS",
    "stability_sample_ms": "SMS_PANEL_STABILITY_SAMPLE_MS",
    "stability_floor_ms": "SMS_PANEL_STABILITY_FLOOR_MS",
    "user_agent": "SMS_PANEL_USER_AGENT",
    "mongo_uri": "MONGO_URI",
    "mongo_db": "SMS_PANEL_MONGO_DB",
}

class ScraperConfig(BaseModel):
    base_url: str = "http://109.236.84.81/ints"
    login_path: str = "/login"
    numbers_path: str = "/agent/MySMSNumbers"
    messages_path: str = "/agent/SMSCDRReports"
    output_dir: str = "./data"
    headless: bool = False  # login happens by hand in the opened window
    user_agent: Optional[str] = None  # pin one UA instead of a random desktop one

    # durations, all milliseconds
    login_poll_interval_ms: int = Field(2000, ge=0)
    login_settle_ms: int = Field(3000, ge=0)
    login_nav_timeout_ms: int = Field(60000, ge=0)
    view_timeout_ms: int = Field(30000, ge=0)
    table_wait_ms: int = Field(20000, ge=0)
    widget_init_ms: int = Field(3000, ge=0)
    numbers_settle_ms: int = Field(25000, ge=0, description="upper bound, thousands of rows")
    messages_settle_ms: int = Field(15000, ge=0)
    stability_sample_ms: int = Field(1000, ge=1000)  # samples at least 1s apart
    stability_floor_ms: int = Field(5000, ge=0)

    # DataTables markup
    table_selector: str = "#dt"
    row_selector: str = "#dt tbody tr"
    page_size_selector: str = 'select[name="dt_length"]'
    show_all_value: str = "-1"

    mongo_uri: Optional[str] = None
    mongo_db: str = "sms_panel"

    @classmethod
    def from_env(cls, **overrides) -> "ScraperConfig":
        """
        Build the config from .env / environment variables.
        Unset variables keep the defaults above; keyword overrides win over both.
        """
        load_dotenv()
        values = {}
        for field, env in ENV_VARS.items():
            raw = os.getenv(env)
            if raw is not None and raw.strip() != "":
                values[field] = raw.strip()
        values.update(overrides)
        return cls(**values)
