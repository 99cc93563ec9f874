"""Built-in import-name -> distribution-name table.

Only names whose import identifier differs from the published distribution
are listed. Read-only for the life of the process.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

_BUILTIN_REMAP: dict[str, str] = {
    # web frameworks and extensions
    "rest_framework": "djangorestframework",
    "rest_framework_simplejwt": "djangorestframework-simplejwt",
    "rest_framework_nested": "drf-nested-routers",
    "drf_yasg": "drf-yasg",
    "drf_spectacular": "drf-spectacular",
    "corsheaders": "django-cors-headers",
    "debug_toolbar": "django-debug-toolbar",
    "django_filters": "django-filter",
    "django_extensions": "django-extensions",
    "django_celery_beat": "django-celery-beat",
    "django_celery_results": "django-celery-results",
    "django_redis": "django-redis",
    "django_otp": "django-otp",
    "crispy_forms": "django-crispy-forms",
    "allauth": "django-allauth",
    "guardian": "django-guardian",
    "mptt": "django-mptt",
    "polymorphic": "django-polymorphic",
    "storages": "django-storages",
    "environ": "django-environ",
    "import_export": "django-import-export",
    "phonenumber_field": "django-phonenumber-field",
    "taggit": "django-taggit",
    "oauth2_provider": "django-oauth-toolkit",
    "channels_redis": "channels-redis",
    "flask_cors": "Flask-Cors",
    "flask_sqlalchemy": "Flask-SQLAlchemy",
    "flask_migrate": "Flask-Migrate",
    "flask_login": "Flask-Login",
    "flask_wtf": "Flask-WTF",
    "flask_restful": "Flask-RESTful",
    "flask_jwt_extended": "Flask-JWT-Extended",
    "flask_mail": "Flask-Mail",
    "flask_caching": "Flask-Caching",
    "flask_limiter": "Flask-Limiter",
    "flask_marshmallow": "flask-marshmallow",
    "flask_socketio": "Flask-SocketIO",
    "flask_babel": "flask-babel",
    "flask_bcrypt": "Flask-Bcrypt",
    "flask_admin": "Flask-Admin",
    "flask_session": "Flask-Session",
    "flask_smorest": "flask-smorest",
    "flask_restx": "flask-restx",
    "fastapi_users": "fastapi-users",
    "fastapi_pagination": "fastapi-pagination",
    "starlette_exporter": "starlette-exporter",
    "socketio": "python-socketio",
    "engineio": "python-engineio",
    "multipart": "python-multipart",
    "jose": "python-jose",
    "jwt": "PyJWT",
    "sse_starlette": "sse-starlette",
    "pydantic_settings": "pydantic-settings",
    "pydantic_core": "pydantic-core",
    "aiohttp_cors": "aiohttp-cors",
    "aiohttp_jinja2": "aiohttp-jinja2",
    "aiohttp_session": "aiohttp-session",
    "werkzeug": "Werkzeug",
    "jinja2": "Jinja2",
    "markupsafe": "MarkupSafe",
    "mako": "Mako",
    "wtforms": "WTForms",
    # data, science, ML
    "sklearn": "scikit-learn",
    "skimage": "scikit-image",
    "cv2": "opencv-python",
    "PIL": "pillow",
    "bs4": "beautifulsoup4",
    "yaml": "PyYAML",
    "dateutil": "python-dateutil",
    "dotenv": "python-dotenv",
    "magic": "python-magic",
    "docx": "python-docx",
    "pptx": "python-pptx",
    "slugify": "python-slugify",
    "Levenshtein": "python-Levenshtein",
    "levenshtein": "Levenshtein",
    "jsonpath_ng": "jsonpath-ng",
    "google_auth_oauthlib": "google-auth-oauthlib",
    "googleapiclient": "google-api-python-client",
    "apiclient": "google-api-python-client",
    "grpc": "grpcio",
    "grpc_status": "grpcio-status",
    "grpc_tools": "grpcio-tools",
    "grpc_health": "grpcio-health-checking",
    "tensorflow_hub": "tensorflow-hub",
    "tensorflow_datasets": "tensorflow-datasets",
    "tensorflow_probability": "tensorflow-probability",
    "tf_keras": "tf-keras",
    "torch_geometric": "torch-geometric",
    "pytorch_lightning": "pytorch-lightning",
    "lightning_fabric": "lightning-fabric",
    "sentence_transformers": "sentence-transformers",
    "faiss": "faiss-cpu",
    "mpl_toolkits": "matplotlib",
    "pylab": "matplotlib",
    "plotly_express": "plotly-express",
    "Bio": "biopython",
    "Crypto": "pycryptodome",
    "Cryptodome": "pycryptodomex",
    "OpenSSL": "pyOpenSSL",
    "nacl": "PyNaCl",
    "gi": "PyGObject",
    "cairo": "pycairo",
    "wx": "wxPython",
    "serial": "pyserial",
    "usb": "pyusb",
    "fitz": "PyMuPDF",
    "pdfminer": "pdfminer.six",
    "markdown": "Markdown",
    "pygments": "Pygments",
    "sqlalchemy": "SQLAlchemy",
    "sqlalchemy_utils": "SQLAlchemy-Utils",
    "psycopg2": "psycopg2-binary",
    "MySQLdb": "mysqlclient",
    "mysql": "mysql-connector-python",
    "pymysql": "PyMySQL",
    "cx_Oracle": "cx-Oracle",
    "snowflake": "snowflake-connector-python",
    "databricks": "databricks-sql-connector",
    "kafka": "kafka-python",
    "confluent_kafka": "confluent-kafka",
    "nats": "nats-py",
    "zmq": "pyzmq",
    "memcache": "python-memcached",
    "bson": "pymongo",
    "gridfs": "pymongo",
    "elasticsearch_dsl": "elasticsearch-dsl",
    "cassandra": "cassandra-driver",
    "influxdb_client": "influxdb-client",
    "clickhouse_driver": "clickhouse-driver",
    "great_expectations": "great-expectations",
    "pandas_gbq": "pandas-gbq",
    "pyximport": "Cython",
    "attr": "attrs",
    "dns": "dnspython",
    "ldap": "python-ldap",
    "Xlib": "python-xlib",
    "odf": "odfpy",
    "win32api": "pywin32",
    "win32con": "pywin32",
    "win32com": "pywin32",
    "win32gui": "pywin32",
    "pythoncom": "pywin32",
    "pywintypes": "pywin32",
    "winerror": "pywin32",
    "pkg_resources": "setuptools",
    "setuptools_scm": "setuptools-scm",
    "google": "protobuf",
    "ruamel": "ruamel.yaml",
    "zope": "zope.interface",
    "OpenGL": "PyOpenGL",
    "speech_recognition": "SpeechRecognition",
    "telegram": "python-telegram-bot",
    "discord": "discord.py",
    "slack_sdk": "slack-sdk",
    "slack_bolt": "slack-bolt",
    "github": "PyGithub",
    "gitlab": "python-gitlab",
    "git": "GitPython",
    "jenkins": "python-jenkins",
    "openstack": "openstacksdk",
    "azure": "azure-core",
    "aws_cdk": "aws-cdk-lib",
    "aws_lambda_powertools": "aws-lambda-powertools",
    "mypy_boto3_s3": "mypy-boto3-s3",
    "smart_open": "smart-open",
    "opentelemetry": "opentelemetry-api",
    "prometheus_client": "prometheus-client",
    "sentry_sdk": "sentry-sdk",
    "json_logging": "json-logging",
    "pythonjsonlogger": "python-json-logger",
    "rich_click": "rich-click",
    "click_log": "click-log",
    "prompt_toolkit": "prompt-toolkit",
    "email_validator": "email-validator",
    "tomli_w": "tomli-w",
    "scrapy": "Scrapy",
    "requests_toolbelt": "requests-toolbelt",
    "requests_oauthlib": "requests-oauthlib",
    "requests_cache": "requests-cache",
    "requests_mock": "requests-mock",
    "requests_html": "requests-html",
    "authlib": "Authlib",
    "argon2": "argon2-cffi",
    "daemon": "python-daemon",
    "apscheduler": "APScheduler",
    "twisted": "Twisted",
    "websocket": "websocket-client",
    "brotli": "Brotli",
    "snappy": "python-snappy",
    "more_itertools": "more-itertools",
    "dogpile": "dogpile.cache",
    "typing_extensions": "typing-extensions",
    "mypy_extensions": "mypy-extensions",
    "marshmallow_sqlalchemy": "marshmallow-sqlalchemy",
    "marshmallow_dataclass": "marshmallow-dataclass",
    "dataclasses_json": "dataclasses-json",
    "charset_normalizer": "charset-normalizer",
    "unidecode": "Unidecode",
    "deep_translator": "deep-translator",
    "barcode": "python-barcode",
    "fpdf": "fpdf2",
    "ffmpeg": "ffmpeg-python",
    "vlc": "python-vlc",
    "yt_dlp": "yt-dlp",
    "langchain_core": "langchain-core",
    "langchain_community": "langchain-community",
    "langchain_openai": "langchain-openai",
    "langchain_anthropic": "langchain-anthropic",
    "langchain_text_splitters": "langchain-text-splitters",
    "llama_index": "llama-index",
    "qdrant_client": "qdrant-client",
    "weaviate": "weaviate-client",
    "huggingface_hub": "huggingface-hub",
    "hydra": "hydra-core",
    "stable_baselines3": "stable-baselines3",
    "tflite_runtime": "tflite-runtime",
    "keras_tuner": "keras-tuner",
    "umap": "umap-learn",
    "community": "python-louvain",
    "osgeo": "GDAL",
    "pulp": "PuLP",
    "talib": "TA-Lib",
    "eth_account": "eth-account",
    "eth_utils": "eth-utils",
    "eth_abi": "eth-abi",
    "solcx": "py-solc-x",
    "dash_bootstrap_components": "dash-bootstrap-components",
    "IPython": "ipython",
    "jupyter_client": "jupyter-client",
    "jupyter_core": "jupyter-core",
    # testing and tooling
    "pytest_asyncio": "pytest-asyncio",
    "pytest_mock": "pytest-mock",
    "pytest_cov": "pytest-cov",
    "pytest_django": "pytest-django",
    "pytest_httpx": "pytest-httpx",
    "pytest_benchmark": "pytest-benchmark",
    "pytest_xdist": "pytest-xdist",
    "xdist": "pytest-xdist",
    "factory": "factory-boy",
    "faker": "Faker",
    "time_machine": "time-machine",
    "vcr": "vcrpy",
    "pre_commit": "pre-commit",
    "sphinx": "Sphinx",
    "sphinx_rtd_theme": "sphinx-rtd-theme",
    "pip_requirements_parser": "pip-requirements-parser",
    "piptools": "pip-tools",
    "importlib_metadata": "importlib-metadata",
    "importlib_resources": "importlib-resources",
    # scientific imaging / astronomy oddities
    "AFQ": "pyAFQ",
    "face_recognition": "face-recognition",
    "pyaudio": "PyAudio",
    "gtts": "gTTS",
    "pyautogui": "PyAutoGUI",
    "kivy": "Kivy",
    "RPi": "RPi.GPIO",
    "Adafruit_DHT": "Adafruit-DHT",
    "board": "Adafruit-Blinka",
    "busio": "Adafruit-Blinka",
    "digitalio": "Adafruit-Blinka",
    "bluetooth": "PyBluez",
    "can": "python-can",
    "modbus_tk": "modbus-tk",
    "snap7": "python-snap7",
    "paho": "paho-mqtt",
    "nmap": "python-nmap",
    "pyVmomi": "pyvmomi",
    "pyVim": "pyvmomi",
    "winrm": "pywinrm",
    "ansible": "ansible-core",
    "consul": "python-consul",
    "babel": "Babel",
    "rfc3339_validator": "rfc3339-validator",
    "ulid": "python-ulid",
    "jks": "pyjks",
    "pkcs11": "python-pkcs11",
    "gnupg": "python-gnupg",
    "secretstorage": "SecretStorage",
}

BUILTIN_REMAP: Mapping[str, str] = MappingProxyType(_BUILTIN_REMAP)
