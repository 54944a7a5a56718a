"""loadreport: aggregate metrics, histograms and reports for HTTP load-test results."""

__version__ = "0.1.0"
