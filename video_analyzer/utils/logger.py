import os
import sys
import logging

from video_analyzer.config import config

logging_str = "[%(asctime)s] {%(pathname)s:%(lineno)d} %(levelname)s - %(message)s"
logging_dir = str(config.LOGS_DIR)
loging_path = os.path.join(logging_dir, "videoanalyzerlogger.log")
if not os.path.exists(logging_dir):
    os.makedirs(logging_dir)
logging.basicConfig(
    level=logging.INFO,
    format=logging_str,
    handlers=[
        logging.FileHandler(loging_path),
        logging.StreamHandler(sys.stdout)
    ]
)

# Third-party loggers stay at INFO; the application logger follows the environment.
logging = logging.getLogger('videoanalyzer')
logging.setLevel(config.LOG_LEVEL)
