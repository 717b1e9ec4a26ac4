import os
import uuid
from werkzeug.utils import secure_filename
from flask import current_app

ALLOWED_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif', 'webp'}

def allowed_file(filename):
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in ALLOWED_EXTENSIONS

def upload_folder():
    folder = current_app.config.get('UPLOAD_FOLDER', 'uploads')
    if not os.path.isabs(folder):
        folder = os.path.join(current_app.instance_path, folder)
    return folder

def save_file(file):
    if not file or not file.filename or not allowed_file(file.filename):
        raise ValueError("File type not allowed")

    filename = secure_filename(file.filename)
    ext = filename.rsplit('.', 1)[1].lower()
    unique_filename = f"{uuid.uuid4().hex}.{ext}"

    folder = upload_folder()
    os.makedirs(folder, exist_ok=True)
    file.save(os.path.join(folder, unique_filename))

    # Served by the /uploads/<name> route
    return f"/uploads/{unique_filename}"


def delete_file(file_url):
    """
    Deletes a previously uploaded file given its public URL.
    URLs that were not produced by save_file are left alone.
    """
    if not file_url or not file_url.startswith("/uploads/"):
        return False

    file_path = os.path.join(upload_folder(), os.path.basename(file_url))

    if os.path.exists(file_path):
        try:
            os.remove(file_path)
            return True
        except OSError as e:
            current_app.logger.error(f"Failed to delete file {file_path}: {e}")
            return False
    return False
