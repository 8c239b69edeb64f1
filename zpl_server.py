#!/usr/bin/env python3
"""
ZPL Image Conversion Server
Flask service turning uploaded images into Z64 / ACS graphic data
"""

import json
import logging
import os
import shutil

from flask import Flask, request, jsonify, Response
from PIL import Image

from image_to_zpl import DEFAULT_OPTIONS, image_to_acs, image_to_z64
from zpl_errors import ZplImageError
from zpl_rotate import ROTATE_CODES, lookup_rotate

app = Flask(__name__)
log = logging.getLogger(__name__)

CONFIG_PATH = os.environ.get("ZPL_IMAGE_CONFIG", os.path.expanduser("~/zpl_image_config.json"))
PORT = 8766

BLACK_MIN = 1
BLACK_MAX = 99

TRUE_STRINGS = ("1", "true", "yes", "on")


def load_config():
    if not os.path.exists(CONFIG_PATH):
        return DEFAULT_OPTIONS.copy()
    try:
        with open(CONFIG_PATH, "r") as f:
            data = json.load(f)
        out = DEFAULT_OPTIONS.copy()
        out.update({k: data.get(k, v) for k, v in DEFAULT_OPTIONS.items()})
        out.update(validate_options(out))
        return out
    except (OSError, ValueError, TypeError, AttributeError) as e:
        log.warning("Ignoring unreadable config %s: %s", CONFIG_PATH, e)
        return DEFAULT_OPTIONS.copy()


def save_config(cfg):
    if os.path.exists(CONFIG_PATH):
        shutil.copyfile(CONFIG_PATH, CONFIG_PATH + ".bak")
    with open(CONFIG_PATH, "w") as f:
        json.dump(cfg, f, indent=2)


def _as_bool(value):
    if isinstance(value, str):
        return value.strip().lower() in TRUE_STRINGS
    return bool(value)


def validate_options(raw):
    """Coerce option values, raising ValueError on anything out of range"""
    out = {}
    if "black" in raw:
        black = int(raw["black"])
        if not BLACK_MIN <= black <= BLACK_MAX:
            raise ValueError(f"black must be between {BLACK_MIN} and {BLACK_MAX}")
        out["black"] = black
    if "rotate" in raw:
        rotate = lookup_rotate(raw["rotate"])
        if rotate is None:
            raise ValueError(f"rotate must be one of {', '.join(ROTATE_CODES)}")
        out["rotate"] = rotate
    if "notrim" in raw:
        out["notrim"] = _as_bool(raw["notrim"])
    return out


@app.route("/api/config", methods=["GET", "POST"])
def api_config():
    if request.method == "GET":
        return jsonify(load_config())
    payload = request.get_json(force=True, silent=True)
    if not payload or not isinstance(payload, dict):
        return jsonify({"error": "Invalid JSON"}), 400
    try:
        changes = validate_options(payload)
    except (ValueError, TypeError) as e:
        return jsonify({"error": f"Invalid value: {e}"}), 400
    merged = load_config()
    merged.update(changes)
    save_config(merged)
    return jsonify(merged)


def _convert(convert):
    data = request.get_data()
    if not data:
        return jsonify({"error": "Empty request body, expected an image"}), 400
    options = load_config()
    try:
        options.update(validate_options(request.args))
    except (ValueError, TypeError) as e:
        return jsonify({"error": f"Invalid value: {e}"}), 400
    try:
        rv = convert(data, options)
    except (OSError, Image.DecompressionBombError):
        # unidentified, truncated or oversized image data
        return jsonify({"error": "Unsupported image format"}), 400
    except ZplImageError as e:
        return jsonify({"error": str(e)}), 400
    log.info("Converted %d byte upload to %dx%d bitmap", len(data), rv.width, rv.height)
    return jsonify(rv._asdict())


@app.route("/api/z64", methods=["POST"])
def api_z64():
    return _convert(image_to_z64)


@app.route("/api/acs", methods=["POST"])
def api_acs():
    return _convert(image_to_acs)


@app.route("/")
def index():
    cfg = load_config()
    return Response(
        f"ZPL Image API\nBlack: {cfg['black']}%  Rotate: {cfg['rotate']}  No trim: {cfg['notrim']}\n\n"
        "Endpoints: /api/z64, /api/acs, /api/config",
        mimetype="text/plain")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    print(f"ZPL image server on port {PORT}")
    print(f"Config: {CONFIG_PATH}")
    app.run(host="0.0.0.0", port=PORT, threaded=True)
