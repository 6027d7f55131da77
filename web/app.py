"""Flask web interface for CRD documentation."""

import logging

from flask import Flask, current_app, jsonify, render_template

from crd_doc.domain.errors import CRDDocError, InvalidPath, LookupMiss, user_message
from crd_doc.domain.models import BuildOptions
from crd_doc.service import list_repo, render_doc
from crd_doc.store import CRDStore, store_from_env
from crd_doc.url_paths import split_tag

logger = logging.getLogger(__name__)

app = Flask(__name__, static_folder='static', template_folder='templates')

# Configuration: set CRD_STORE / BUILD_OPTIONS to override the environment defaults
app.config.setdefault('CRD_STORE', None)
app.config.setdefault('BUILD_OPTIONS', None)


def _store() -> CRDStore:
    store = current_app.config.get('CRD_STORE')
    if store is None:
        store = store_from_env()
        current_app.config['CRD_STORE'] = store
    return store


def _options() -> BuildOptions:
    options = current_app.config.get('BUILD_OPTIONS')
    if options is None:
        options = BuildOptions.from_env()
        current_app.config['BUILD_OPTIONS'] = options
    return options


def _status(error: CRDDocError) -> int:
    if isinstance(error, InvalidPath):
        return 400
    if isinstance(error, LookupMiss):
        return 404
    return 422


@app.route('/')
def home():
    return render_template('home.html')


@app.route('/github.com/<org>/<repo>')
def org(org: str, repo: str):
    """List the CRDs indexed for a repository (``repo`` may carry ``@tag``)."""
    repo, tag = split_tag(repo)
    try:
        listing = list_repo(_store(), org, repo, tag)
    except LookupMiss as e:
        logger.warning("Failed to get CRDs for %s: %s", repo, e)
        return render_template('new.html'), 404
    except CRDDocError as e:
        logger.warning("Failed to get CRDs for %s: %s", repo, e)
        return render_template('error.html', message=user_message(e)), _status(e)
    logger.info("Rendered org page for %s", listing.repo)
    return render_template('org.html', listing=listing)


@app.route('/api/doc/<path:doc_path>')
def api_doc(doc_path: str):
    """Documentation page as JSON."""
    try:
        page = render_doc(_store(), doc_path, _options())
    except CRDDocError as e:
        logger.warning("Failed to document %s: %s", doc_path, e)
        return jsonify({'error': e.kind, 'message': user_message(e)}), _status(e)
    return jsonify(page.to_dict())


@app.route('/<path:doc_path>')
def doc(doc_path: str):
    """Documentation page for a single CRD."""
    try:
        page = render_doc(_store(), doc_path, _options())
    except LookupMiss as e:
        logger.warning("Failed to get CRD for %s: %s", doc_path, e)
        return render_template('new.html'), 404
    except CRDDocError as e:
        logger.warning("Failed to document %s: %s", doc_path, e)
        return render_template('error.html', message=user_message(e)), _status(e)
    return render_template('doc.html', page=page)


def main():
    import argparse

    parser = argparse.ArgumentParser(description='CRD documentation server')
    parser.add_argument('--host', default='0.0.0.0', help='Bind address (default: 0.0.0.0)')
    parser.add_argument('--port', type=int, default=5000, help='Port (default: 5000)')
    parser.add_argument('--debug', action='store_true', help='Enable Flask debug mode')
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    logger.info("Starting doc server...")
    app.run(host=args.host, port=args.port, debug=args.debug)


if __name__ == '__main__':
    main()
