"""The hotel bounded context of the example application."""