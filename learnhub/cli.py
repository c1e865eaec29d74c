"""Command Line Interface for LearnHub.

This module provides the interactive terminal client for the LearnHub
course marketplace.

Usage:
    python -m learnhub
    python -m learnhub --catalog courses.json

Commands:
    /courses [page]   - Show a catalog page
    /search <text>    - Search course titles and descriptions
    /filter k=v ...   - Set category, level or sort
    /next, /prev      - Catalog pagination
    /add <id>         - Add a course to the cart
    /remove <id>      - Remove a course from the cart
    /cart             - Show the cart and order summary
    /promo <code>     - Apply a promo code
    /open <id>        - Open a course in the lecture player
    /lecture <where>  - Go to the next, prev or a given lecture
    /done [id]        - Toggle lecture completion
    /dashboard        - Show learning progress
    /reviews <id>     - Show a course's rating summary
    /review <id> <rating> <comment> - Review a course
    /delreview <course id> <review id> - Delete a review
    /notes            - Show notes on the open course
    /note [time] <text> - Add a note to the open course
    /delnote <id>     - Delete a note
    /instructor <id>  - Show an instructor profile
    /mycourses        - Show courses you teach
    /session          - Show session statistics
    /clear            - Clear session state
    /quit             - Exit the application
"""

import argparse
import asyncio
import logging
import re
import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from dotenv import load_dotenv

from learnhub.config import settings
from learnhub.core import LearnHubSession
from learnhub.data import load_catalog
from learnhub.exceptions import LearnHubError
from learnhub.models import CoursePage
from learnhub.services import LearnHubClient, page_window
from learnhub.utils import (
    describe_filters,
    format_cart,
    format_courses,
    format_curriculum,
    format_dashboard,
    format_duration,
    format_instructor,
    format_notes,
    format_page_footer,
    format_reviews,
    parse_filters,
    parse_page_number,
)

load_dotenv()

TIMESTAMP_PATTERN = re.compile(r"^\d{1,2}(:\d{2}){1,2}$")


def setup_logging() -> None:
    """Configure logging based on settings."""
    logging.basicConfig(
        level=getattr(logging, settings.logging.level, logging.INFO),
        format=settings.logging.format,
        handlers=[logging.StreamHandler(sys.stdout)]
    )


def print_banner(offline: bool) -> None:
    """Print welcome banner."""
    print("=" * 60)
    print("  LEARNHUB - Course Marketplace")
    print("=" * 60)
    print()
    if offline:
        print("Running offline against a local catalog file.")
    else:
        print(f"Backend: {settings.api.base_url}")
    print()
    print("Commands: /courses, /search, /cart, /open, /dashboard, /help, /quit")
    print("=" * 60)
    print()


def print_help() -> None:
    """Print help information."""
    help_text = f"""
CATALOG:
  /courses [page]      - Show a catalog page
  /search <text>       - Search titles and descriptions
  /filter k=v ...      - category=<name> level=<name> sort=<key>
                         (empty value clears a filter)
  /next, /prev         - Next / previous catalog page

  Sort keys: newest, oldest, price-low, price-high, popularity, rating
  Levels:    {", ".join(settings.catalog.levels)}
  Categories: {", ".join(settings.catalog.categories)}

CART:
  /add <course id>     - Add a course
  /remove <course id>  - Remove a course
  /cart                - Show cart and order summary
  /promo <code>        - Apply a promo code

LEARNING:
  /open <course id>    - Open a course in the player
  /lecture next|prev   - Move between lectures
  /lecture <id>        - Jump to a lecture
  /done [lecture id]   - Toggle completion (current lecture by default)
  /dashboard           - Show your progress
  /reviews <course id> - Show ratings for a course
  /review <course id> <rating> <comment>
                       - Rate a course from 1 to 5
  /delreview <course id> <review id>
                       - Delete one of your reviews

NOTES:
  /notes               - Show notes on the open course
  /note [m:ss] <text>  - Add a note, optionally at a video position
  /delnote <note id>   - Delete a note

INSTRUCTORS:
  /instructor <id>     - Show an instructor profile
  /instructor <id> add <n>
                       - Add the profile's n-th course to the cart
  /mycourses           - Show the courses you teach

OTHER:
  /session             - Show session statistics
  /clear               - Clear session state
  /help                - Show this help
  /quit                - Exit the program
"""
    print(help_text)


def print_notifications(session: LearnHubSession) -> None:
    """Print and clear queued notifications."""
    for note in session.notifications():
        marker = "!" if note.level == "error" else "*"
        text = f"{note.title}: {note.message}" if note.message else note.title
        print(f"  {marker} {text}")


def print_page(session: LearnHubSession, page: Optional[CoursePage]) -> None:
    """Print a catalog page with its pagination footer."""
    if page is None:
        return
    print(f"\nFilters: {describe_filters(session.state.filters)}\n")
    print(format_courses(page.items, start=page.first_index))
    if page.total:
        print()
        print(format_page_footer(page, page_window(page.page, page.total_pages)))
    print()


def print_player(session: LearnHubSession) -> None:
    """Print the open course's curriculum and current lecture."""
    player = session.learning.player
    if player is None:
        print("\nNo course is open. Use /open <course id>.\n")
        return
    print()
    print(format_curriculum(player.course, player.states(), player.state.current_lecture_id))
    lecture = player.current_lecture
    if lecture is not None:
        print(f"\nNow playing: {lecture.title} ({format_duration(lecture.duration_seconds)})")
    print(f"Progress: {player.progress}%\n")


def print_session_stats(session: LearnHubSession) -> None:
    """Print current session statistics."""
    stats = session.get_session_stats()
    print(f"""
Session Statistics:
  User:           {stats['user'] or 'Guest'}
  Courses shown:  {stats['courses_shown']} of {stats['total_courses']}
  Cart items:     {stats['cart_items']}
  Promo code:     {stats['promo_code'] or 'None'}
  Enrollments:    {stats['enrollments']}
  Current course: {stats['current_course'] or 'None'}
""")


def parse_filter_args(args: List[str]) -> Dict[str, str]:
    """Parse ``key=value`` words into a filter update."""
    updates = {}
    for arg in args:
        key, sep, value = arg.partition("=")
        key = key.strip().lower()
        if sep and key in ("category", "level", "sort"):
            updates[key] = value.replace("_", " ").strip()
    return updates


def split_note_args(arg: str) -> Tuple[str, str]:
    """Split ``[m:ss] text`` into a video position and the note text."""
    first, _, rest = arg.partition(" ")
    if TIMESTAMP_PATTERN.match(first):
        return first, rest.strip()
    return "", arg


async def handle_command(session: LearnHubSession, cmd: str, arg: str) -> None:
    """Dispatch one catalog, cart or learning command."""
    if cmd == "/courses":
        page = await session.catalog.browse(page=parse_page_number(arg))
        print_page(session, page)

    elif cmd == "/search":
        print_page(session, await session.catalog.search(arg))

    elif cmd == "/filter":
        current = session.state.filters.model_dump()
        current.update(parse_filter_args(arg.split()))
        page = await session.catalog.browse(parse_filters(current), page=1)
        print_page(session, page)

    elif cmd == "/next":
        print_page(session, await session.catalog.next_page())

    elif cmd == "/prev":
        print_page(session, await session.catalog.previous_page())

    elif cmd == "/add":
        await session.cart.add(arg)

    elif cmd == "/remove":
        await session.cart.remove(arg)

    elif cmd == "/cart":
        print()
        print(format_cart(session.state.cart, session.cart.totals()))
        print()

    elif cmd == "/promo":
        # Unknown codes are ignored silently
        session.cart.apply_promo(arg)
        print()
        print(format_cart(session.state.cart, session.cart.totals()))
        print()

    elif cmd == "/open":
        if await session.learning.open_course(arg):
            print_player(session)

    elif cmd == "/lecture":
        player = session.learning.player
        if player is None:
            print_player(session)
            return
        if arg == "next":
            player.next_lecture()
        elif arg == "prev":
            player.previous_lecture()
        else:
            player.select(arg)
        print_player(session)

    elif cmd == "/done":
        if await session.learning.set_completion(arg or None):
            print_player(session)

    elif cmd == "/dashboard":
        await session.dashboard.refresh()
        print()
        print(format_dashboard(session.dashboard.enrollments(), session.dashboard.summary()))
        print()

    elif cmd == "/reviews":
        summary = await session.learning.reviews(arg)
        if summary is not None:
            print()
            print(format_reviews(summary))
            print()

    elif cmd == "/review":
        course_id, rating, comment = (arg.split(maxsplit=2) + ["", "", ""])[:3]
        if not rating.isdigit():
            print("\nUsage: /review <course id> <rating 1-5> <comment>\n")
            return
        await session.learning.add_review(course_id, int(rating), comment)

    elif cmd == "/delreview":
        parts = arg.split()
        if len(parts) != 2:
            print("\nUsage: /delreview <course id> <review id>\n")
            return
        await session.learning.delete_review(*parts)

    elif cmd == "/notes":
        if await session.learning.load_notes():
            print()
            print(format_notes(session.state.notes))
            print()

    elif cmd == "/note":
        timestamp, text = split_note_args(arg)
        if await session.learning.add_note(text, timestamp):
            print()
            print(format_notes(session.state.notes))
            print()

    elif cmd == "/delnote":
        await session.learning.delete_note(arg)

    elif cmd == "/instructor":
        instructor_id, _, rest = arg.partition(" ")
        profile = await session.instructors.profile(instructor_id)
        if profile is None:
            return
        action, _, number = rest.strip().partition(" ")
        if action == "add":
            index = parse_page_number(number, default=0) - 1
            if 0 <= index < len(profile.created_courses):
                await session.cart.add(profile.created_courses[index].id)
            else:
                print(f"\nNo course number {number} on this profile.\n")
            return
        print()
        print(format_instructor(profile))
        print()

    elif cmd == "/mycourses":
        print()
        print(format_courses(await session.instructors.my_courses()))
        print()

    else:
        print(f"\nUnknown command: {cmd}. Type /help for commands.\n")


async def run_cli(catalog_path: Optional[Path] = None) -> None:
    """Run the interactive CLI."""
    setup_logging()
    logger = logging.getLogger("learnhub.cli")

    print_banner(offline=catalog_path is not None)

    print("Initializing...")
    try:
        if catalog_path is not None:
            session = LearnHubSession(catalog=load_catalog(catalog_path))
        else:
            session = LearnHubSession(LearnHubClient())
        await session.start()
    except LearnHubError as e:
        logger.error(f"Failed to initialize: {e}")
        print(f"ERROR: {e}")
        return

    print_notifications(session)
    print("Ready! Type /courses to browse or /help for commands.\n")

    try:
        while True:
            try:
                user_input = input("> ").strip()

                if not user_input:
                    continue

                cmd, _, arg = user_input.partition(" ")
                cmd = cmd.lower()
                arg = arg.strip()

                if cmd in ("/quit", "/exit", "/q"):
                    print("\nGoodbye!")
                    break

                if cmd == "/help":
                    print_help()
                    continue

                if cmd == "/session":
                    print_session_stats(session)
                    continue

                if cmd == "/clear":
                    session.clear()
                    print("\nSession cleared.\n")
                    continue

                try:
                    await handle_command(session, cmd, arg)
                except LearnHubError as e:
                    print(f"\nError: {e}\n")
                print_notifications(session)

            except KeyboardInterrupt:
                print("\n\nInterrupted. Type /quit to exit.\n")
                continue

    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        print(f"\nError: {e}")

    finally:
        await session.close()


def main() -> None:
    """Entry point for the CLI."""
    parser = argparse.ArgumentParser(prog="learnhub", description="LearnHub course marketplace client")
    parser.add_argument("--catalog", type=Path, help="Run offline against a JSON course catalog")
    args = parser.parse_args()
    asyncio.run(run_cli(args.catalog))


if __name__ == "__main__":
    main()
