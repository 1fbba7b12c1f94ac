import logging

import click
from flask import Flask, flash, redirect, render_template, request, session, url_for

from book_list import config
from book_list.models import ActionResult, BookDraft
from book_list.services.catalog import CatalogError, search_catalog
from book_list.services.tracker import BookTracker, get_tracker_for, new_tracker_id
from book_list.utils import truncate_description

config.configure_logging()
logger = logging.getLogger("book_list")

app = Flask(__name__)
app.config["SECRET_KEY"] = config.SECRET_KEY
app.jinja_env.filters["truncate_description"] = truncate_description


def get_tracker() -> BookTracker:
    """Return the tracker bound to the current browser session."""
    tracker_id = session.get("tracker_id")
    if not tracker_id:
        tracker_id = new_tracker_id()
        session["tracker_id"] = tracker_id
    return get_tracker_for(tracker_id)


@app.route("/")
def index():
    tracker = get_tracker()
    if not tracker.initial_loaded:
        # Failures here are logged by the tracker and not shown to the user.
        tracker.load_initial(search_catalog, config.DEFAULT_QUERY)
    return render_template("index.html", tracker=tracker)


@app.route("/search", methods=["POST"])
def search():
    tracker = get_tracker()
    result = tracker.search(request.form.get("q", ""), search_catalog)

    if result is ActionResult.EMPTY_QUERY:
        flash("Please enter a search term!", "error")
    elif result is ActionResult.NETWORK_ERROR:
        flash("Error searching books. Please try again.", "error")
    elif result is ActionResult.NO_RESULTS:
        flash("No books found for that search.", "info")
    return redirect(url_for("index"))


@app.route("/books/<book_id>/toggle", methods=["POST"])
def toggle_status(book_id: str):
    get_tracker().toggle_status(book_id)
    return redirect(url_for("index"))


@app.route("/my-books", methods=["POST"])
def add_to_my_books():
    tracker = get_tracker()
    book_id = (request.form.get("book_id", "") or "").strip()
    result = tracker.add_search_result(book_id)

    if result is ActionResult.SUCCESS:
        flash("Book added to your personal list!", "success")
    elif result is ActionResult.DUPLICATE:
        flash("Book already in your list!", "info")
    else:
        flash("Book not found.", "error")
    return redirect(url_for("index"))


@app.route("/my-books/new", methods=["POST"])
def add_new_book():
    tracker = get_tracker()
    result = tracker.add_manual_book(BookDraft.from_form(request.form))

    if result is ActionResult.VALIDATION_FAILED:
        flash("Please fill in Title and Author!", "error")
    else:
        flash("Book added successfully.", "success")
    return redirect(url_for("index"))


@app.cli.command("search")
@click.argument("query")
@click.option("--limit", default=config.CATALOG_MAX_RESULTS, show_default=True)
def search_command(query, limit):
    """Search the catalog and print the normalized results."""
    try:
        books = search_catalog(query, max_results=limit)
    except CatalogError as exc:
        raise click.ClickException(str(exc))

    if not books:
        click.echo("No books found.")
        return
    for book in books:
        click.echo(f"{book.id}\t{book.title} - {book.author} ({book.year})")


if __name__ == "__main__":
    app.run(debug=config.FLASK_DEBUG)
