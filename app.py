"""
=============================================================================
Result Ledger Upload Server
=============================================================================

Flask API in front of the extractor. A ledger PDF is uploaded as the
multipart field 'pdf' and the parsed records come back as JSON (or as the
subject-level CSV export).

Endpoints:
    POST /api/results       -> {"success": true, "data": {...}}
    POST /api/results/csv   -> ledger_subjects.csv attachment
    GET  /api/health        -> {"status": "ok"}

Usage:
    python app.py [--host HOST] [--port PORT] [--debug]

Date: 2026-10-19
Version: 1.0
=============================================================================
"""

import argparse
import io
import logging
import os

from flask import Flask, jsonify, request, send_file
from werkzeug.exceptions import RequestEntityTooLarge

from config import Config, setup_logging
from export_utils import subjects_csv
from extract_ledger import ExtractionError, LedgerExtractor
from pdf_processor import PdfTextConverter


logger = logging.getLogger(__name__)

PDF_MIME_TYPE = 'application/pdf'


class UploadError(Exception):
    """Rejected upload; carries the client-facing message"""


def _error(message: str, status: int):
    return jsonify({'success': False, 'error': message}), status


def create_app(config_object=None) -> Flask:
    """
    Application factory.

    Args:
        config_object: Settings object or import path loaded after Config

    Returns:
        Configured Flask app; the extractor is kept in
        app.extensions['ledger_extractor']
    """
    app = Flask(__name__)
    app.config.from_object(Config)
    if config_object is not None:
        app.config.from_object(config_object)

    app.extensions['ledger_extractor'] = LedgerExtractor(
        default_result_date=app.config.get('DEFAULT_RESULT_DATE'),
        converter=PdfTextConverter(y_tolerance=app.config.get('Y_TOLERANCE', 5.0)),
    )

    max_mb = int(app.config['MAX_CONTENT_LENGTH'] / (1024 * 1024)) or 1
    too_large_message = f"File size too large. Maximum size is {max_mb}MB."

    def read_upload() -> bytes:
        """Validate the 'pdf' field and return its bytes"""
        uploaded = request.files.get('pdf')
        if uploaded is None or not uploaded.filename:
            raise UploadError("No PDF file uploaded")
        if uploaded.mimetype != PDF_MIME_TYPE:
            raise UploadError("Only PDF files are allowed")
        return uploaded.read()

    def parse_upload():
        data = read_upload()
        logger.info(f"Received {request.files['pdf'].filename} ({len(data)} bytes)")
        return app.extensions['ledger_extractor'].parse_pdf(data)

    @app.route('/api/results', methods=['POST'])
    def upload_results():
        try:
            result = parse_upload()
        except UploadError as e:
            return _error(str(e), 400)
        except ExtractionError as e:
            logger.error(f"Extraction failed: {e}")
            return _error(str(e), 500)

        return jsonify({'success': True, 'data': result.to_dict()})

    @app.route('/api/results/csv', methods=['POST'])
    def upload_results_csv():
        try:
            result = parse_upload()
        except UploadError as e:
            return _error(str(e), 400)
        except ExtractionError as e:
            logger.error(f"Extraction failed: {e}")
            return _error(str(e), 500)

        output = io.BytesIO(subjects_csv(result).encode('utf-8'))
        return send_file(
            output,
            mimetype='text/csv',
            as_attachment=True,
            download_name='ledger_subjects.csv'
        )

    @app.route('/api/health', methods=['GET'])
    def health():
        return jsonify({'status': 'ok'})

    @app.errorhandler(RequestEntityTooLarge)
    def file_too_large(e):
        return _error(too_large_message, 400)

    return app


def main(argv=None):
    """Run the development server"""
    parser = argparse.ArgumentParser(description='Result ledger upload server')
    parser.add_argument('--host', default='127.0.0.1', help='Bind address (default: 127.0.0.1)')
    parser.add_argument('--port', type=int, default=5000, help='Port (default: 5000)')
    parser.add_argument('--debug', action='store_true', help='Enable Flask debug mode')
    args = parser.parse_args(argv)

    setup_logging(os.path.join(Config.LOG_DIR, 'server.log'), level=Config.LOG_LEVEL)

    app = create_app()
    app.run(host=args.host, port=args.port, debug=args.debug)


if __name__ == '__main__':
    main()
