"""
YouTube Comment Export Tool

This script fetches every comment thread (and its replies) of a single YouTube video
using the YouTube Data API v3 and saves them as a CSV, HTML or JSON file in the
output directory.
"""

# ============================================================================
# IMPORTS
# ============================================================================

import argparse
import os
import sys
import tempfile

from tqdm import tqdm

from yt_comment_fetcher.config import API_KEY, CONFIG, ORDERS
from yt_comment_fetcher.errors import ProviderError, YtCommentFetcherError
from yt_comment_fetcher.exporters import EXPORTERS, dump
from yt_comment_fetcher.fetcher import CommentFetcher
from yt_comment_fetcher.resolver import parse_video_id


# ============================================================================
# UTILITY FUNCTIONS
# ============================================================================

def print_missing_api_key():
    print("=" * 70)
    print("ERROR: YouTube API key not found or not configured properly")
    print("=" * 70)
    print()
    print("Please follow these steps:")
    print("1. Get your API key from Google Cloud Console:")
    print("   https://console.cloud.google.com/apis/credentials")
    print()
    print("2. Add it to a .env file next to this script:")
    print("   YOUTUBE_API_KEY=your_actual_api_key_here")
    print()
    print("   or pass it with --api-key")
    print()
    print("3. Make sure YouTube Data API v3 is enabled in your project")
    print("=" * 70)


def atomic_write_text(file_path, text):
    """
    Atomically write text to a file using a temporary file and os.replace().

    The target file is never left partially written, even if the program is
    interrupted during the write.

    Parameters:
        file_path (str): The target file path to write to
        text (str): The content to write
    """
    # Temp file in the same directory so os.replace() stays on one filesystem
    dir_path = os.path.dirname(file_path) or '.'

    with tempfile.NamedTemporaryFile(mode='w', encoding='utf-8', newline='', dir=dir_path, delete=False) as temp_file:
        temp_path = temp_file.name
        try:
            temp_file.write(text)
            temp_file.flush()
            os.fsync(temp_file.fileno())
        except BaseException:
            temp_file.close()
            os.unlink(temp_path)
            raise

    os.replace(temp_path, file_path)


def collect_comments(fetcher, video_id, progress=None):
    """
    Drive the fetcher to exhaustion and return every comment record in order.

    Parameters:
        fetcher (CommentFetcher): A configured fetcher
        video_id (str): The video to fetch comments from
        progress (callable or None): Called with (batch, total_so_far) after each page

    Returns:
        list: All comment records, each thread followed by its replies
    """
    comments = []
    for batch in fetcher.fetch(video_id):
        comments.extend(batch)
        if progress is not None:
            progress(batch, len(comments))
    return comments


def page_size(value):
    size = int(value)
    if not 1 <= size <= CONFIG['max_results_comments']:
        raise argparse.ArgumentTypeError(f"page size must be between 1 and {CONFIG['max_results_comments']}")
    return size


def non_negative_int(value):
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError("must be 0 or greater")
    return number


def build_parser():
    parser = argparse.ArgumentParser(
        description='Export all comments and replies of a YouTube video',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive mode (prompts for the video URL)
  python main.py

  # Export the newest 500 threads as HTML
  python main.py --video "https://www.youtube.com/watch?v=dQw4w9WgXcQ" --max-results 500 --format html

  # Override API key from command line
  python main.py --video dQw4w9WgXcQ --api-key "YOUR_KEY"
        """
    )
    parser.add_argument('--video', type=str,
                        help='YouTube video URL or video ID')
    parser.add_argument('--api-key', type=str,
                        help='YouTube Data API v3 key (overrides .env file)')
    parser.add_argument('--order', choices=ORDERS, default=CONFIG['order'],
                        help='Comment thread ordering (default: time)')
    parser.add_argument('--max-results', type=non_negative_int, default=None,
                        help='Maximum number of top-level comments to fetch (default: all)')
    parser.add_argument('--page-size', type=page_size, default=CONFIG['max_results_comments'],
                        help='Comment threads per API request, 1-100 (default: 100)')
    parser.add_argument('--format', choices=sorted(EXPORTERS), default='csv',
                        help='Output format (default: csv)')
    parser.add_argument('--output-dir', type=str, default=CONFIG['output_dir'],
                        help='Directory for the exported file (default: output)')
    parser.add_argument('--filename', type=str,
                        help='File name without extension (default: youtube_comments_<videoId>)')
    return parser


# ============================================================================
# MAIN EXECUTION
# ============================================================================

def main(argv=None):
    args = build_parser().parse_args(argv)

    api_key = args.api_key or API_KEY
    if not api_key or api_key == "your_api_key_here":
        print_missing_api_key()
        return 1

    try:
        # Step 1: User Input (Interactive or CLI)
        print()
        if args.video:
            video_input = args.video.strip()
        else:
            video_input = input("Enter the YouTube video URL or ID: ").strip()

        # Step 2: Extract Video ID
        try:
            video_id = parse_video_id(video_input)
        except ValueError as e:
            print(f"Error: {e}")
            print("Please provide a valid YouTube video URL and try again.")
            return 1
        print(f"Processing video: {video_id}")
        print()

        # Step 3: Fetch All Comments
        fetcher = CommentFetcher(
            api_key,
            order=args.order,
            max_request_results=args.page_size,
            max_results=args.max_results,
        )
        with tqdm(desc="Fetching comments", unit="comments") as progress_bar:
            comments = collect_comments(
                fetcher, video_id,
                progress=lambda batch, total: progress_bar.update(len(batch)),
            )

        # Step 4: Export and Save
        filename = args.filename or f"{CONFIG['filename_stem']}_{video_id}"
        exported = dump(comments, args.format, filename=filename)

        os.makedirs(args.output_dir, exist_ok=True)
        output_path = os.path.join(args.output_dir, exported.name)
        atomic_write_text(output_path, exported.content)

        # Step 5: Completion Message
        top_level_count = sum(1 for comment in comments if comment['isTopLevel'])
        print()
        print("=" * 70)
        print("Processing complete!")
        print("=" * 70)
        print(f"Top-level comments: {top_level_count}")
        print(f"Replies: {len(comments) - top_level_count}")
        print(f"Data saved to: {output_path} ({exported.mime_type})")
        print("=" * 70)
        return 0

    except ProviderError as e:
        print()
        print(f"❌ YouTube API error: {e.message}")
        if e.reason == 'commentsDisabled':
            print("Comments are disabled for this video.")
        elif e.reason == 'quotaExceeded':
            print("API quota exceeded. Quota resets at midnight Pacific Time (PT).")
        return 1
    except YtCommentFetcherError as e:
        print(f"\n❌ Error: {e}")
        return 1
    except KeyboardInterrupt:
        print("\n\nScript interrupted by user. Nothing was written.")
        return 0
    except Exception as e:
        print(f"\nUnexpected error: {e}")
        print("Please check your configuration and try again.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
