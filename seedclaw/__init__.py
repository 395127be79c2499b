"""seedclaw: Seedream (Jiemeng AI) image generation relayed to OpenClaw channels.

Package layout:
    - `config`: explicit runtime settings resolved from the environment.
    - `errors`: typed failure kinds shared by every layer.
    - `image`: Seedream request/response models and HTTP client.
    - `messaging`: OpenClaw message model and dispatcher (CLI or gateway).
    - `core`: generate-then-send orchestration.
    - `api`: command-line adapter.
"""

__version__ = "0.1.0"
