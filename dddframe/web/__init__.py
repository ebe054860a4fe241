"""HTTP endpoints and the WSGI server that hosts them."""