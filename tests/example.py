"""Declarations of a typical site: stylesheets and scripts, bundled, then grouped."""

from basicbundles.configuration import Configuration

CONTENT = {
    "~/Content/bootstrap.css": ".btn { background: url('../img/btn.png') }\n",
    "~/Content/bootstrap.min.css": ".btn{background:url(../img/btn.png)}\n",
    "~/Content/bootstrap-modal.css": ".modal { }\n",
    "~/Content/jquery-ui.css": ".ui { }\n",
    "~/Content/jquery-ui.min.css": ".ui{}\n",
    "~/Scripts/jquery.js": "var jQuery = {};\n",
    "~/Scripts/jquery-ui.js": "jQuery.ui = {};\n",
    "~/Scripts/jquery-ui.min.js": "jQuery.ui={};\n",
    "~/Scripts/bootstrap.js": "jQuery.fn.modal = function () {};\n",
    "~/Scripts/bootstrap.min.js": "jQuery.fn.modal=function(){};\n",
}


class BundleConfig:
    def __init__(self, configuration: Configuration):
        self.css_bootstrap = configuration.add_css("~/Content/bootstrap(.min).css")
        self.css_bootstrap_modal = configuration.add_css(
            "~/Content/bootstrap-modal.css", self.css_bootstrap
        )
        self.css_jquery_ui = configuration.add_css("~/Content/jquery-ui(.min).css")
        self.css_default = configuration.add_bundle(
            "~/bundles/styles", self.css_bootstrap, self.css_jquery_ui
        )

        self.js_jquery = configuration.add_js("~/Scripts/jquery.js")
        self.js_jquery_ui = configuration.add_js("~/Scripts/jquery-ui(.min).js", self.js_jquery)
        self.js_bootstrap = configuration.add_js("~/Scripts/bootstrap(.min).js", self.js_jquery)
        self.js_default = configuration.add_bundle(
            "~/bundles/scripts", self.js_jquery, self.js_bootstrap
        )

        self.default_requirements = configuration.add_group(self.css_default, self.js_default)
