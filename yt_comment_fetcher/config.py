"""
Configuration for the YouTube comment fetcher.

Values are read from the environment (a local .env file is loaded first) so the
API key never has to be typed on the command line.
"""

import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


# ============================================================================
# CONFIGURATION
# ============================================================================

CONFIG = {
    'output_dir': os.getenv("YT_COMMENTS_OUTPUT_DIR", "output"),  # Where the CLI writes exports
    'api_service_name': 'youtube',       # Discovery service name for googleapiclient
    'api_version': 'v3',                 # YouTube Data API version
    'max_results_comments': 100,         # Comment threads per API call (max 100 per YouTube API)
    'order': 'time',                     # Default ordering of comment threads
    'filename_stem': 'youtube_comments',  # Default stem for exported files
}

# Orderings supported by commentThreads.list
ORDERS = ('time', 'relevance')

# The only web origin accepted for video URLs
YOUTUBE_ORIGIN = "https://www.youtube.com"

# Set your API key in .env file: YOUTUBE_API_KEY=your_key_here
API_KEY = os.getenv("YOUTUBE_API_KEY")
