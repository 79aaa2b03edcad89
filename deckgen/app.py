# flask --app deckgen.app run --port 5000

import io
import logging
import os

from dotenv import load_dotenv
from flask import Flask, jsonify, request, send_file
from flask_cors import CORS
from werkzeug.exceptions import RequestEntityTooLarge

from . import config
from .assembler import slides_from_payload
from .errors import ExtractionError, InputError, UpstreamError
from .export import build_package, build_pdf, normalize_image_map, render_html
from .image_generate import placeholder_image, resolve_image, search_pexels
from .pdf_extract import extract_pdf_text
from .run_deck import run_deck

load_dotenv()

app = Flask(__name__)
app.config["MAX_CONTENT_LENGTH"] = config.MAX_REQUEST_BYTES
app.logger.setLevel(config.LOG_LEVEL)

CORS(app, resources={r"/api/*": {"origins": config.CORS_ORIGINS}})


@app.errorhandler(RequestEntityTooLarge)
def request_too_large(exc):
    limit_mb = config.MAX_PDF_BYTES // (1024 * 1024)
    return jsonify({'error': f'File too large. Maximum size is {limit_mb}MB'}), 400


@app.route('/')
def index():
    return 'Deck generator API is running.'


@app.route('/health')
def health():
    return jsonify({'status': 'ok'})


def _search_term():
    data = request.get_json(silent=True) or {}
    term = data.get('searchTerm')
    if not isinstance(term, str) or not term.strip():
        raise InputError('Search term is required')
    return term.strip()


@app.route('/api/generate-slides', methods=['POST'])
def generate_slides_route():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        app.logger.error(f"Failed to parse JSON body, Content-Type: {request.content_type}")
        return jsonify({'error': 'Invalid JSON in request body'}), 400

    title = data.get('title') or ''
    content = data.get('content') or ''
    input_method = data.get('inputMethod') or None
    if not isinstance(title, str) or not isinstance(content, str):
        return jsonify({'error': 'title and content must be strings'}), 400
    if not title.strip() and not content.strip():
        return jsonify({'error': 'Either title or content is required'}), 400

    app.logger.info(
        f"Generating slides from {input_method or 'auto'}. "
        f"Title: {title.strip() or 'None'!r}, Content length: {len(content)}"
    )

    try:
        slides = run_deck(title, content, input_method)
    except InputError as exc:
        return jsonify({'error': str(exc)}), 400
    except Exception as exc:
        app.logger.exception("Slide generation failed", exc_info=exc)
        return jsonify({'error': 'Failed to generate slides', 'details': str(exc)}), 500

    return jsonify({'slides': [slide.to_dict() for slide in slides]})


@app.route('/api/extract-pdf', methods=['POST'])
def extract_pdf_route():
    pdf_file = request.files.get('pdf')
    if pdf_file is None:
        return jsonify({'error': 'No PDF file provided'}), 400

    if pdf_file.mimetype and 'pdf' not in pdf_file.mimetype:
        app.logger.warning(f"Rejected upload {pdf_file.filename!r} of type {pdf_file.mimetype}")
        return jsonify({'error': 'Please select a PDF file'}), 400

    try:
        payload = pdf_file.read()
        if len(payload) > config.MAX_PDF_BYTES:
            limit_mb = config.MAX_PDF_BYTES // (1024 * 1024)
            return jsonify({'error': f'File too large. Maximum size is {limit_mb}MB'}), 400

        app.logger.info(f"Received file: {pdf_file.filename} Size: {len(payload)} Type: {pdf_file.mimetype}")
        result = extract_pdf_text(payload)
    except ExtractionError as exc:
        app.logger.warning(f"PDF extraction failed: {exc.message} ({exc.details})")
        return jsonify({'error': exc.message, 'details': exc.details}), 422
    except Exception as exc:
        app.logger.exception("Unexpected error in PDF extraction", exc_info=exc)
        return jsonify({'error': 'Failed to extract text from PDF', 'details': str(exc)}), 500

    return jsonify(result)


@app.route('/api/image-service', methods=['POST'])
def image_service_route():
    try:
        term = _search_term()
        app.logger.info(f"Finding best image for: {term!r}")
        return jsonify(resolve_image(term))
    except InputError as exc:
        return jsonify({'error': str(exc)}), 400
    except Exception as exc:
        app.logger.exception("Image lookup failed", exc_info=exc)
        return jsonify({'error': 'Failed to find suitable image', 'details': str(exc)}), 500


@app.route('/api/pexels-images', methods=['POST'])
def pexels_images_route():
    try:
        term = _search_term()
    except InputError as exc:
        return jsonify({'error': str(exc)}), 400

    try:
        photos = search_pexels(term)
    except UpstreamError as exc:
        return jsonify({'error': str(exc), 'searchTerm': term})
    return jsonify({'photos': photos, 'searchTerm': term, 'source': 'pexels'})


@app.route('/api/placeholder-image', methods=['POST'])
def placeholder_image_route():
    try:
        return jsonify(placeholder_image(_search_term()))
    except InputError as exc:
        return jsonify({'error': str(exc)}), 400


def _export_request():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InputError('Invalid JSON in request body')
    slides = slides_from_payload(data.get('slides'))
    return slides, data.get('theme'), normalize_image_map(data.get('images'))


@app.route('/api/export/<fmt>', methods=['POST'])
def export_route(fmt):
    if fmt not in ('html', 'package', 'pdf'):
        return jsonify({'error': f'Unsupported export format: {fmt}'}), 404

    try:
        slides, theme, images = _export_request()
        if fmt == 'html':
            body = render_html(slides, theme_name=theme, images=images).encode('utf-8')
            return send_file(io.BytesIO(body), as_attachment=True,
                             download_name='presentation.html', mimetype='text/html')
        if fmt == 'package':
            body = build_package(slides, theme_name=theme, images=images)
            return send_file(io.BytesIO(body), as_attachment=True,
                             download_name='presentation_package.zip', mimetype='application/zip')
        body = build_pdf(slides)
        return send_file(io.BytesIO(body), as_attachment=True,
                         download_name='presentation.pdf', mimetype='application/pdf')
    except InputError as exc:
        return jsonify({'error': str(exc)}), 400
    except Exception as exc:
        app.logger.exception("Export failed", exc_info=exc)
        return jsonify({'error': 'Failed to export presentation', 'details': str(exc)}), 500


if __name__ == '__main__':
    logging.basicConfig(level=config.LOG_LEVEL)
    app.run(debug=True, port=int(os.getenv("PORT", "5000")))
